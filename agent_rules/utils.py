import os
import shutil
from pathlib import Path
from typing import Optional


def backup_path_for(path: Path, suffix: str) -> Path:
    return Path(f"{path}{suffix}")


def backup_file(path: Path, suffix: str) -> Path:
    backup_path = backup_path_for(path, suffix)
    shutil.copyfile(path, backup_path)
    return backup_path


def read_bytes_safe(path: Path) -> Optional[bytes]:
    if not path.is_file():
        return None
    return path.read_bytes()


def read_text_safe(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")


def remove_empty_parents(path: Path, stop_at: Path) -> list[Path]:
    removed: list[Path] = []
    stop = stop_at.resolve()
    current = path.parent
    while is_under(current, stop) and current.resolve() != stop:
        try:
            current.rmdir()
        except OSError:
            break
        removed.append(current)
        current = current.parent
    return removed


def is_under(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def relative_posix(path: Path, root: Path) -> Optional[str]:
    if not is_under(path, root):
        return None
    return path.resolve().relative_to(root.resolve()).as_posix()


def relpath(path: Path, base: Path) -> str:
    return os.path.relpath(str(path), str(base))


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
