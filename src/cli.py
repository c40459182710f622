"""Interactive loop: the terminal stands in for the page.

A plain line of text is typed into the submit field and confirmed with
Enter; the id commands click the matching item's toggle or delete control.
Every mutation is persisted by the store as it happens, so leaving the
loop (exit, Ctrl-C, Ctrl-D) needs no final save.
"""
import os
from typing import Optional
from controller import TodoController
from renderer import format_list

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
def _clear_screen() -> None:  # pragma: no cover
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


TOGGLE_COMMANDS = {'x', 'toggle'}
DELETE_COMMANDS = {'rm', 'delete'}


class CLI:
    def __init__(self, controller: TodoController, alt_screen: Optional[bool] = None):
        self.controller: TodoController = controller
        # Alt screen default ON; disable with TODOS_ALT_SCREEN=0 (or false/no/off)
        if alt_screen is None:
            alt_screen = _truthy_env(os.getenv("TODOS_ALT_SCREEN"), True)
        self.alt_screen: bool = alt_screen
        self.message: Optional[str] = None

    def display(self) -> None:
        for line in format_list(self.controller.task_list, self.controller.document.title):
            print(line)

    def run(self) -> None:
        """Main REPL loop; the list is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.display()
                if self.message:
                    print(f"\n{self.message}")
                    self.message = None
                line = input("\n> ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle_line(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- command dispatch --------------------
    def handle_line(self, line: str) -> None:
        line = line.strip()
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        if cmd == 'add':
            self._cmd_add(line.split(None, 1)[1] if len(tokens) > 1 else '')
        elif cmd in TOGGLE_COMMANDS and len(tokens) == 2:
            self._cmd_click(tokens[1], 'toggle')
        elif cmd in DELETE_COMMANDS and len(tokens) == 2:
            self._cmd_click(tokens[1], 'delete')
        elif cmd == 'clear' and len(tokens) == 1:
            removed = self.controller.clear_completed()
            self.message = f"Cleared {removed} completed task(s)."
        else:
            self._type_into_submit(line)

    def _cmd_add(self, text: str) -> None:
        if not text.strip():
            self.message = "Task text required."
            return
        self._type_into_submit(text.strip())

    def _type_into_submit(self, text: str) -> None:
        field = self.controller.submit_field
        field.value = text
        field.dispatch('keydown', key='Enter')

    def _cmd_click(self, raw_id: str, control: str) -> None:
        raw_id = raw_id.rstrip('.')
        if not raw_id.isdecimal():
            self.message = "Invalid id."
            return
        view = self.controller.items.get(int(raw_id))
        if view is None:
            self.message = f"Task id {raw_id} not found."
            return
        getattr(view, control).click()

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  <text>              Add a task (anything that is not a command)")
        print("  add <text...>       Add a task explicitly (e.g., add x marks the spot)")
        print("  x <id>              Toggle a task complete / active (alias: toggle)")
        print("  rm <id>             Delete a task (alias: delete)")
        print("  clear               Delete every completed task")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Leave (tasks are saved as you go)")
