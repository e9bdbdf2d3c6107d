"""Interactive package browser for depsize."""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widget import Widget

from depsize.display import render_frame
from depsize.models import PackageRecord
from depsize.navigation import NavigationState, clamp_to_viewport, handle_key, key_from_name


class PackageView(Widget):
    """Full-screen view of the package list or of one package."""

    def render(self):
        """Render the current frame for this widget's height."""
        return self.app.frame(self.size.height)


class DepsizeApp(App):
    """Browse a scanned dependency directory."""

    TITLE = "depsize"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    PackageView {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "navigate('q')", "Quit"),
        Binding("up,k", "navigate('up')", "Up", show=False),
        Binding("down,j", "navigate('down')", "Down", show=False),
        Binding("pageup", "navigate('pageup')", "Page Up", show=False),
        Binding("pagedown", "navigate('pagedown')", "Page Down", show=False),
        Binding("home", "navigate('home')", "Top", show=False),
        Binding("end", "navigate('end')", "Bottom", show=False),
        Binding("enter", "navigate('enter')", "Details", show=False),
        Binding("escape", "navigate('escape')", "Back", show=False),
    ]

    def __init__(self, packages: list[PackageRecord]):
        super().__init__()
        self.packages = packages
        self.nav = NavigationState()

    def compose(self) -> ComposeResult:
        yield PackageView(id="packages")

    def frame(self, viewport_height: int):
        """Reclamp navigation to the current viewport and build the frame."""
        self.nav = clamp_to_viewport(self.nav, viewport_height, len(self.packages))
        return render_frame(self.packages, self.nav, viewport_height)

    def action_navigate(self, key_name: str) -> None:
        """Apply one key press to the navigation state."""
        view = self.query_one("#packages", PackageView)
        self.nav = handle_key(
            self.nav,
            key_from_name(key_name),
            view.size.height,
            len(self.packages),
        )
        if self.nav.quit_requested:
            self.exit()
            return
        view.refresh()


def run_tui(packages: list[PackageRecord]) -> None:
    """Run the interactive TUI over an already scanned collection.

    Args:
        packages: Package records, largest first
    """
    app = DepsizeApp(packages)
    app.run()
