# src/dumpcode/config.py
from typing import FrozenSet, List

from dumpcode.errors import ConfigError

DEFAULT_EXTENSIONS = (
    "rs,py,js,ts,jsx,tsx,go,java,c,cpp,cc,cxx,"
    "h,hpp,hxx,cs,rb,php,scala,kt,kts,groovy,pl,pm,swift,lua,"
    "ex,exs,elm,hs,erl,fs,sh,bash,zsh,fish,ps1,json,toml,"
    "yaml,yml,xml,ini,conf,properties,sql,graphql,gql,prisma,"
    "md,markdown,rst,txt,csv,org,html,css,scss,sass,less,tex,"
    "rmd,bat"
)

DEFAULT_EXCLUDES = (
    ".git,node_modules,target,dist,build,venv,.venv,__pycache__,"
    ".idea,.vscode,bin,obj,.mypy_cache,debug,.fingerprint,.cache,"
    "bower_components,coverage,tmp,temp,.next,out,logs,release,"
    ".gradle,gradle,vendor,packages,artifacts,generated,pods,"
    ".eggs,.pytest_cache,cmake-build-debug,cmake-build-release,"
    "CMakeFiles,.vs,.ipynb_checkpoints"
)

DEFAULT_MAX_SIZE_KB = 100
DEFAULT_MAX_FILES = 1000

CLIPBOARD_ATTEMPTS = 3
CLIPBOARD_RETRY_DELAY = 0.05  # seconds


def parse_list(raw: str) -> List[str]:
    """Splits a comma-separated flag value, dropping blanks."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def normalize_extensions(raw: str) -> FrozenSet[str]:
    """
    Turns 'py, .RS,md' into {'py', 'rs', 'md'}.
    '*' (or nothing at all) means every extension is allowed, which is the empty set.
    """
    items = parse_list(raw)
    if "*" in items:
        return frozenset()

    extensions = set()
    for item in items:
        ext = item.lstrip(".").lower()
        if not ext:
            raise ConfigError(f"Invalid extension '{item}'")
        if "/" in ext or "\\" in ext:
            raise ConfigError(f"Extension '{item}' must not contain a path separator")
        extensions.add(ext)
    return frozenset(extensions)
