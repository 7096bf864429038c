"""Small filesystem helpers shared by the exporters."""
import os


def ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_bytes(path: str, data: bytes) -> None:
    ensure_parent(path)
    with open(path, "wb") as f:
        f.write(data)


def write_text(path: str, text: str) -> None:
    ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
