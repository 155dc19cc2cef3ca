# src/dumpcode/utils/languages.py
import re
from pathlib import PurePosixPath

LANG_MAP = {
    "rs": "rust",
    "go": "go",
    "c": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "h": "c",
    "hpp": "cpp",
    "hxx": "cpp",
    "js": "javascript",
    "ts": "typescript",
    "jsx": "jsx",
    "tsx": "tsx",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "sass": "scss",
    "less": "less",
    "java": "java",
    "kt": "kotlin",
    "kts": "kotlin",
    "scala": "scala",
    "groovy": "groovy",
    "py": "python",
    "rb": "ruby",
    "php": "php",
    "cs": "csharp",
    "swift": "swift",
    "pl": "perl",
    "pm": "perl",
    "lua": "lua",
    "ex": "elixir",
    "exs": "elixir",
    "elm": "elm",
    "hs": "haskell",
    "erl": "erlang",
    "fs": "fsharp",
    "sh": "bash",
    "bash": "bash",
    "zsh": "bash",
    "fish": "fish",
    "ps1": "powershell",
    "bat": "batch",
    "json": "json",
    "toml": "toml",
    "yaml": "yaml",
    "yml": "yaml",
    "xml": "xml",
    "ini": "ini",
    "conf": "conf",
    "properties": "properties",
    "sql": "sql",
    "graphql": "graphql",
    "gql": "graphql",
    "prisma": "prisma",
    "md": "markdown",
    "markdown": "markdown",
    "rst": "rst",
    "tex": "latex",
    "rmd": "rmarkdown",
    "txt": "text",
    "csv": "csv",
    "org": "org",
}

SHEBANG_RE = re.compile(r"^#!\s*/usr/bin/env\s+(\w+)|^#!\s*/.*/(\w+)")

SHEBANG_MAP = {
    "python": "python",
    "python3": "python",
    "ruby": "ruby",
    "node": "javascript",
    "nodejs": "javascript",
    "bash": "bash",
    "sh": "bash",
    "perl": "perl",
    "php": "php",
    "lua": "lua",
    "Rscript": "r",
}


def detect_shebang(content: str) -> str:
    first_line = content.split("\n", 1)[0]
    match = SHEBANG_RE.match(first_line)
    if not match:
        return ""
    interpreter = match.group(1) or match.group(2)
    return SHEBANG_MAP.get(interpreter, "")


def detect_special_file(content: str) -> str:
    if "FROM " in content:
        return "dockerfile"
    if "JAVA_HOME" in content:
        return "properties"
    return ""


def language_for(rel_path: str, content: str = "") -> str:
    """
    Returns the fence tag for a file, or '' when nothing fits.
    Extension lookup wins; otherwise a shebang line, then a guess for
    extension-less files such as Dockerfile.
    """
    ext = PurePosixPath(rel_path).suffix.lower().lstrip(".")
    if ext in LANG_MAP:
        return LANG_MAP[ext]
    if content.startswith("#!"):
        return detect_shebang(content)
    if not ext:
        return detect_special_file(content)
    return ""
