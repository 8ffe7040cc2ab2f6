import sys
from sw.common.logger import log
from sw.ui.app import main

# `python -m sw` / the `stopwatch` script. Qt's exit code is passed straight through; anything that escapes
# the event loop gets its traceback written to the logs before we bail out with 1.
def run(argv=None) -> None:
    argv = sys.argv if argv is None else argv
    log.info(f"Launching stopwatch with args {argv[1:]}")
    try:
        code = main(argv)
    except Exception:
        log.exception("Stopwatch crashed outside the event loop, exiting")
        sys.exit(1)
    log.info(f"Stopwatch closed with exit code {code}")
    sys.exit(code)

if __name__ == "__main__":
    run()
