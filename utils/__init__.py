from utils.logger import logger
from utils.data_loader import load_input_file

__all__ = [
    "logger",
    "load_input_file",
]
