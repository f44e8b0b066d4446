import os

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


def data_file(*parts: str) -> str:
    return os.path.join(DATA_DIR, *parts)


def open_file(filename: str) -> str:
    with open(filename, "r", encoding="utf8") as f:
        return f.read()
