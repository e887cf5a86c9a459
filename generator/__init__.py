"""
SnapTest 測試產生器 (Generator)

把 SnapTest 上的測試目錄樹 (folder / test / component) 產生成
指定測試框架的原始碼，寫到目前目錄下的頂層資料夾 (預設 snaptests/)。

用法:
    python -m generator -t <token> -r pytest -s function
    python -m generator -i my_tests.json -c my_generator.py

產生流程：
    1. 取得 backend (官方名稱 -r 或自訂路徑 -c) 並檢查 style
    2. 讀取資料 (伺服器或本地檔案)
    3. 裁切子樹 (-f)、計算路徑、對應 test / component 紀錄
    4. 清除舊的輸出目錄
    5. 交給 backend 產生檔案
"""

__version__ = "1.0.0"
