import sys
import os
import curses

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

import logger
from config_paths import load_config
from errors import PagerError, TerminalError
from line_feed import LineFeed, open_source
from orchestrator import Orchestrator
from terminal import attach_controlling_tty

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = (
    "scroll - page through text while it is still arriving\n\n"
    "Usage:\n  scroll [path]\n  command | scroll\n  scroll -v\n\n"
    "Keys:\n"
    "  j/k, arrows      scroll one line\n"
    "  Ctrl+D/Ctrl+U    scroll half a page (also PgDn/PgUp, space)\n"
    "  g/G, Home/End    jump to top/bottom\n"
    "  /text Enter      search; n jumps to the next match\n"
    "  q, Ctrl+C        quit\n"
)

log = logger.setup_logger("main")


def parse_args(args):
    """Return ``(action, path)`` where action is run, help, version or usage."""
    if "-v" in args or "-V" in args or "--version" in args:
        return "version", None
    if "-h" in args or "--help" in args:
        return "help", None
    if len(args) > 1:
        return "usage", None
    if args and args[0].startswith("-") and args[0] != "-":
        return "usage", None
    return "run", (args[0] if args else None)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    action, path = parse_args(args)

    if action == "version":
        print(__version__)
        return 0
    if action == "help":
        print(USAGE)
        return 0
    if action == "usage":
        print(USAGE, file=sys.stderr)
        return 2

    if path in (None, "-") and sys.stdin.isatty():
        print("scroll: missing filename (pipe text in or give a path)", file=sys.stderr)
        return 2

    config = load_config()
    logger.configure(config["LOG_LEVEL"])

    def curses_main(stdscr):
        Orchestrator(stdscr, feed, config).run()

    try:
        source = open_source(path)
        attach_controlling_tty()
        feed = LineFeed(
            source,
            batch_size=config["BATCH_SIZE"],
            encoding=config["ENCODING"],
            errors=config["ENCODING_ERRORS"],
        )
        curses.wrapper(curses_main)
    except curses.error as e:
        err = TerminalError(f"terminal error: {e}")
        log.error("%s", err)
        print(f"scroll: {err}", file=sys.stderr)
        return 1
    except PagerError as e:
        log.error("%s", e)
        print(f"scroll: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
