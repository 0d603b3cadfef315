"""
utils.py: module that serve general functionalities for the deploy commands but not
directly tied to a single backend.
"""
import subprocess


def run(cmd, env=None):
    """
    run: runs an external command with its output passed through to the terminal.
    The exit status is left to the caller to inspect.
    :param cmd: Command as argument list
    :param env: Environment mapping for the child process (defaults to ours)
    """
    return subprocess.run(cmd, text=True, check=False, env=env)


def _color(code):
    """
    _color: returns color code that can be use inside terminal
    """
    return f"\033[{code}m"

RED = _color("31")
GREEN = _color("32")
YELLOW = _color("33")
BLUE = _color("34")
BOLD = _color("1")
RESET = _color("0")

def info(msg):
    """
    info: prints message with formatting for INFO
    """
    print(f"{BLUE}[INFO] {msg}{RESET}")

def success(msg):
    """
    success: prints message with formatting for SUCCEEDED event
    """
    print(f"{GREEN}[OK] {msg}{RESET}")

def warning(msg):
    """
    warning: prints message with formatting for WARNING
    """
    print(f"{YELLOW}[WARNING] {msg}{RESET}")

def error(msg):
    """
    error: prints message with formatting for FAILED/ERROR event
    """
    print(f"{RED}[ERROR] {msg}{RESET}")

def fatal(msg):
    """
    fatal: prints message with formatting for unrecoverable failure event
    """
    print(f"{RED}[FATAL] {msg}{RESET}")

def heading(msg):
    """
    heading: prints message with formatting for heading for more results
    """
    print(f"\n{BOLD}{msg}{RESET}")
