"""Interactive shell loop for the task tracker.

Each command goes through the Board (mutate -> sweep -> save) and the table
is redrawn from a fresh view model on the next cycle.
"""
import shlex
from typing import List, Optional, Union
from board import Board
from display import display
from models import ALL, NotFound, Status, Task, TrackerError

# --- terminal control helpers ---
# We aggressively clear: ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home))
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


STATUS_ALIASES = {
    'ip': Status.IN_PROGRESS,
    'in-progress': Status.IN_PROGRESS,
    'in progress': Status.IN_PROGRESS,
    'c': Status.COMPLETED,
    'completed': Status.COMPLETED,
    'done': Status.COMPLETED,
    'o': Status.OVERDUE,
    'overdue': Status.OVERDUE,
}


def parse_status(raw: str) -> Optional[Status]:
    return STATUS_ALIASES.get(raw.strip().lower())


def parse_status_filter(raw: str) -> Union[Status, str, None]:
    if raw.strip().lower() in {'all', 'a', '*'}:
        return ALL
    return parse_status(raw)


def resolve_task(board: Board, raw_id: str) -> Task:
    """Find a task by full id or unique prefix; raises TrackerError."""
    task = board.store.find_by_prefix(raw_id.rstrip('.'))
    if task is None:
        raise NotFound(f'Task id {raw_id} not found.')
    return task


class CLI:
    def __init__(self, board: Board, alt_screen: bool = True):
        self.board: Board = board
        self.alt_screen: bool = alt_screen
        self.status_filter = ALL
        self.category_filter: str = ALL
        self.message: Optional[str] = None

    def run(self) -> None:
        """Main REPL loop; the board is cleared and redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so prior renders
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                # date may roll over while the shell is open
                self.board.refresh()
                self._redraw()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the board...")
                    continue
                if lower in ('exit', 'quit'):
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def _redraw(self) -> None:
        _clear_screen()
        print("Tasks:")
        display(self.board.view(self.status_filter, self.category_filter))
        if self.message:
            print(f"\n{self.message}")
            self.message = None

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            self.message = f"Could not parse command: {exc}"
            return
        if not tokens:
            return
        cmd = tokens[0].lower()
        handler = {
            'add': self._cmd_add,
            'st': self._cmd_status,
            'status': self._cmd_status,
            'rm': self._cmd_rm,
            'filter': self._cmd_filter,
        }.get(cmd)
        if handler is None:
            self.message = "Unknown command. Type 'help' for instructions."
            return
        try:
            handler(tokens)
        except TrackerError as exc:
            self.message = str(exc)

    # ---- individual command helpers ----
    def _cmd_add(self, tokens: List[str]) -> None:
        if len(tokens) > 1:  # inline shorthand: add <name> [category] [deadline]
            name = tokens[1]
            category = tokens[2] if len(tokens) > 2 else ''
            deadline = tokens[3] if len(tokens) > 3 else None
        else:
            name = input("Task name: ").strip()
            category = input("Category: ").strip()
            deadline = input("Deadline (YYYY-MM-DD, blank for none): ").strip()
        task = self.board.add_task(name, category, deadline)
        self.message = f'Added "{task.name}" ({task.short_id}).'

    def _cmd_status(self, tokens: List[str]) -> None:
        if len(tokens) < 3:
            self.message = "Usage: st <id> <status>; statuses: ip/c/o"
            return
        task = resolve_task(self.board, tokens[1])
        raw_status = ' '.join(tokens[2:])
        new_status = parse_status(raw_status) or raw_status
        self.board.set_status(task.id, new_status)

    def _cmd_rm(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self.message = "Usage: rm <id>"
            return
        task = resolve_task(self.board, tokens[1])
        self.board.delete_task(task.id)
        self.message = f'Task "{task.name}" removed.'

    def _cmd_filter(self, tokens: List[str]) -> None:
        if len(tokens) == 1:
            self.status_filter, self.category_filter = ALL, ALL
            return
        status_filter = parse_status_filter(tokens[1])
        if status_filter is None:
            self.message = "Invalid status filter; use All/ip/c/o."
            return
        self.status_filter = status_filter
        self.category_filter = tokens[2] if len(tokens) > 2 else ALL

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  add                           Add a task (prompts for name, category, deadline)")
        print('  add <name> [cat] [deadline]   Shorthand add, e.g. add "write report" work 2025-01-31')
        print("  st <id> <status>              Set status; aliases: ip (In Progress), c (Completed), o (Overdue)")
        print("  rm <id>                       Remove a task by id (a unique prefix is enough)")
        print("  filter [status] [category]    Filter the table; 'All' matches everything, no args resets")
        print("  help                          Show this help (press Enter to return)")
        print("  exit                          Exit (changes are saved as you go)")
