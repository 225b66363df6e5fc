import argparse
import asyncio
import logging
import os
import sys
import termios

from rich.console import Console
from rich.live import Live
from rich.markup import escape

from keys import KeyReader
from session import Session
from settings import Settings
from ui import render

logger = logging.getLogger("dusty")


def positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="dusty", description="Browse disk usage of a directory tree.")
    parser.add_argument("path", nargs="?", default=".", help="directory to scan (default: current directory)")
    parser.add_argument("--workers", type=positive_int, default=None, help="threads used for filesystem calls")
    parser.add_argument("--log-file", default=None, help="write debug logs to this file")
    return parser.parse_args(argv)


def setup_logging(log_file=None):
    root = logging.getLogger()
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
    else:
        # the terminal belongs to the UI
        root.addHandler(logging.NullHandler())


async def main(path, settings, reader, console=None):
    console = console or Console()
    loop = asyncio.get_running_loop()
    session = Session(path, settings)
    keys = asyncio.Queue()

    def on_input():
        for key in reader.read_keys():
            keys.put_nowait(key)

    session.start_scan()
    with reader.cbreak_mode(), Live(console=console, screen=True, auto_refresh=False) as live:
        loop.add_reader(reader.stdin_fd, on_input)
        try:
            while True:
                live.update(render(session, console.size.height), refresh=True)
                try:
                    key = await asyncio.wait_for(keys.get(), timeout=settings.refresh_interval)
                except asyncio.TimeoutError:
                    continue
                if not session.handle_key(key):
                    break
        finally:
            loop.remove_reader(reader.stdin_fd)
            session.close()
    return session


def describe_error(exc):
    if exc.filename:
        return f"{exc.strerror or exc}: {exc.filename}"
    return str(exc)


def fail(message):
    Console(stderr=True).print(f"[bold red]Error:[/] {escape(message)}")
    sys.exit(1)


def open_key_reader():
    try:
        return KeyReader(sys.stdin.fileno())
    except (termios.error, OSError, ValueError) as exc:
        logger.debug("stdin unusable: %s", exc)
        fail("stdin is not a terminal")


def run(argv=None):
    args = parse_args(argv)
    try:
        os.stat(args.path)
    except OSError as exc:
        fail(describe_error(exc))

    setup_logging(args.log_file)
    settings = Settings() if args.workers is None else Settings(max_workers=args.workers)
    reader = open_key_reader()

    busy = True
    try:
        session = asyncio.run(main(args.path, settings, reader))
        busy = session.busy
    except KeyboardInterrupt:
        logger.info("interrupted")

    if busy:
        abandon(0)


def abandon(code):
    # scan or delete threads may be stuck in filesystem calls, exit without joining them
    logging.shutdown()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


if __name__ == "__main__":
    run()
