"""Path and URL helpers shared by the renderer and link validator"""

import os
import re


EXTERNAL_URL_RE = re.compile(r"^[a-z]+:", re.IGNORECASE)


def slash(path: str) -> str:
    """Normalize OS path separators to forward slashes."""
    return path.replace(os.sep, "/") if os.sep != "/" else path


def is_external(url: str) -> bool:
    """True for URLs with a scheme (http:, mailto:, ...)."""
    return bool(EXTERNAL_URL_RE.match(url))


def relative_path(src_dir: str, file_path: str) -> str:
    """Return file_path relative to src_dir with forward slashes."""
    return slash(os.path.relpath(file_path, src_dir))
