"""
CLI 入口

用法:
    # 從 SnapTest 伺服器產生 (官方 pytest backend, class 風格)
    python -m generator -t <token> -r pytest -s class

    # 從本地 JSON 檔產生
    python -m generator -i my_tests.json -r manifest

    # 只產生某個資料夾，輸出到 ./e2e
    python -m generator -i my_tests.json -r pytest -s function -f <folderId> -o e2e

    # 使用自訂 generator
    python -m generator -i my_tests.json -c my_gen/generator.py

    # 列出官方 generator
    python -m generator --list-frameworks
"""

import argparse
import sys

from core.exceptions import SnapGenError
from generator import __version__
from generator.engine import GeneratorEngine, GeneratorOptions
from generator.registry import available_backends
from utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapgen",
        description="SnapTest 測試產生器 — 將測試目錄樹產生為框架原始碼",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
範例:
  snapgen -t <token> -r pytest -s class       # 從伺服器
  snapgen -i my_tests.json -r manifest        # 從本地檔案
  snapgen -i my_tests.json -c my_gen.py       # 自訂 generator
""",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-f", "--folder",
        help="只產生此 id 的資料夾",
    )
    parser.add_argument(
        "-t", "--token",
        help="SnapTest auth token (也可用環境變數 SNAPTEST_TOKEN)",
    )
    parser.add_argument(
        "-o", "--top-dir-name", "--topDirName", dest="top_dir_name",
        help="輸出頂層目錄名稱 (預設 snaptests)",
    )
    parser.add_argument(
        "-r", "--framework",
        help="官方 generator 名稱",
    )
    parser.add_argument(
        "-s", "--style",
        help="generator 風格",
    )
    parser.add_argument(
        "-i", "--input-file", "--inputFile", dest="input_file",
        help="從本地 JSON / YAML 測試檔產生",
    )
    parser.add_argument(
        "-c", "--path-to-gen", "--pathToGen", dest="path_to_gen",
        help="自訂 generator 的路徑",
    )
    parser.add_argument(
        "--list-frameworks", action="store_true",
        help="列出官方 generator 與可用風格",
    )
    return parser


def _print_frameworks() -> None:
    for info in available_backends():
        styles = ", ".join(info["styles"]) or "-"
        print(f"{info['name']:<12} styles: {styles:<20} {info['description']}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_frameworks:
        _print_frameworks()
        return 0

    options = GeneratorOptions(
        framework=args.framework,
        path_to_gen=args.path_to_gen,
        style=args.style,
        token=args.token,
        input_file=args.input_file,
        folder=args.folder,
        top_dir_name=args.top_dir_name,
    )

    try:
        GeneratorEngine(options).run()
    except SnapGenError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
