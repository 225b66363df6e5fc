from rich.console import Group
from rich.markup import escape
from rich.style import Style
from rich.text import Text

SPINNER_FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
BAR_WIDTH = 20
HELP_TEXT = "  ↑/↓: Navigate | ←/→: Enter/Exit | d: Delete | s: Sort | Home: Root | q: Quit"

TITLE_STYLE = Style(bold=True, color="#FAFAFA", bgcolor="#7D56F4")
DIR_STYLE = Style(bold=True, color="#04B575")
FILE_STYLE = Style(color="#FAFAFA")
SIZE_STYLE = Style(bold=True, color="#FFA500")
SELECTED_STYLE = Style(color="#FFFFFF", bgcolor="#3A3A3A")
ERROR_STYLE = Style(bold=True, color="#FF0000")
HELP_STYLE = Style(italic=True, color="#666666")


def format_size(size):
    if size < 1024:
        return f"{size} B"
    div, exp = 1024, 0
    n = size // 1024
    while n >= 1024 and exp < 5:
        div *= 1024
        exp += 1
        n //= 1024
    return f"{size / div:.1f} {'KMGTPE'[exp]}B"


def spinner(elapsed):
    return SPINNER_FRAMES[int(elapsed * 10) % len(SPINNER_FRAMES)]


def render_scanning(progress, elapsed):
    lines = [
        Text(""),
        Text(f"  {spinner(elapsed)} Scanning directories... {elapsed:.1f}s"),
        Text(""),
        Text(f"  Files: {progress.files_scanned} | Directories: {progress.dirs_scanned}"),
    ]
    if progress.has_snapshot:
        lines.append(Text(f"  Current size: {format_size(progress.total_size)}"))
        lines.append(Text(""))
        if progress.largest:
            lines.append(Text("  Largest items found:"))
            for node in progress.largest:
                name = node.name + ("/" if node.is_dir else "")
                lines.append(Text.assemble("    ", (f"{format_size(node.size):>10}", SIZE_STYLE), "  ", name))
    lines.append(Text(""))
    lines.append(Text("  Press 'q' to quit"))
    return Group(*lines)


def render_error(error):
    return Text.from_markup(f"\n  [bold #FF0000]Error: {escape(str(error))}[/]\n")


def entry_line(entry):
    filled = min(BAR_WIDTH, int(entry.percent / 100.0 * BAR_WIDTH))
    bar = "█" * filled + "░" * (BAR_WIDTH - filled)
    if entry.is_dir:
        name = (entry.name + "/", DIR_STYLE)
    else:
        name = (entry.name, FILE_STYLE)
    return Text.assemble(
        "  ",
        (f"{format_size(entry.size):>10}", SIZE_STYLE),
        f" {entry.percent:5.1f}% [{bar}] ",
        name,
    )


def visible_range(cursor, count, height):
    max_items = max(5, height - 8)
    start = cursor - max_items + 1 if cursor >= max_items else 0
    return start, min(count, start + max_items)


def render_browser(view, height, footer):
    lines = [
        Text(f" Dusty - {view.path} ", style=TITLE_STYLE),
        Text(f"Total Size: {format_size(view.size)} | Sort: {view.sort_mode.value}"),
        Text(""),
    ]
    start, end = visible_range(view.cursor, len(view.entries), height)
    for i in range(start, end):
        line = entry_line(view.entries[i])
        if i == view.cursor:
            line.stylize(SELECTED_STYLE)
        lines.append(line)
    lines.append(Text(""))
    lines.append(footer)
    return Group(*lines)


def render_footer(session):
    deleter = session.deleter
    if session.deleting:
        return Text(f"{spinner(session.elapsed())} Deleting {deleter.target.name}...", style=SIZE_STYLE)
    status = session.status_text()
    if status is not None:
        return Text(status, style=ERROR_STYLE if deleter.status.is_error else "")
    return Text(HELP_TEXT, style=HELP_STYLE)


def render(session, height):
    if session.scanning:
        return render_scanning(session.progress, session.elapsed())
    if session.scan_error is not None:
        return render_error(session.scan_error)
    if session.navigator is None:
        return Text("\n  No data available\n")
    return render_browser(session.navigator.view(), height, render_footer(session))
