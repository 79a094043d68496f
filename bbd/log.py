import sys

# Verbose mode (disabled by default, enabled with --verbose)
VERBOSE = False

def set_verbose(enabled: bool):
    global VERBOSE
    VERBOSE = enabled

def log_info(msg: str):
    """Print info message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[INFO] {msg}", file=sys.stderr)

def log_warn(msg: str):
    """Print warning message only if verbose mode is enabled."""
    if VERBOSE:
        print(f"[WARN] {msg}", file=sys.stderr)
