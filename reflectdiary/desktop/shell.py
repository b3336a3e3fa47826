"""Desktop shell: starts the API server, serves the pages, opens a launcher window."""

from __future__ import annotations

import importlib.util
import logging
import os
import subprocess
import sys
import threading
import webbrowser
from typing import Callable, Optional

from werkzeug.serving import make_server

from reflectdiary import PROJECT_ROOT
from reflectdiary.config import config_by_name

logger = logging.getLogger(__name__)

SERVER_MODULE = "reflectdiary.wsgi"
READY_MARKER = "Server started"
APP_TITLE = "Reflection Diary"


class ServerStartError(RuntimeError):
    """The API server process could not be spawned."""


def _default_config():
    dev = os.environ.get("DIARY_ENV", "").lower() == "development"
    return config_by_name["development" if dev else "production"]


class DesktopShell:
    def __init__(
        self,
        config=None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        platform: Optional[str] = None,
        open_browser: Callable[[str], bool] = webbrowser.open,
    ):
        self.config = config or _default_config()
        self.popen = popen
        self.platform = platform or sys.platform
        self.open_browser = open_browser
        self.server_proc: Optional[subprocess.Popen] = None
        self.server_ready = threading.Event()
        self.frontend_server = None
        self.window = None

    @property
    def dev_mode(self) -> bool:
        return bool(self.config.DIARY_DEV_MODE)

    # ---- API server process ----

    def _server_env(self) -> dict:
        env = dict(os.environ)
        env.setdefault("APP_ENV", "development" if self.dev_mode else "production")
        env["PYTHONUNBUFFERED"] = "1"
        return env

    def start_server(self) -> bool:
        """Spawn the API server; True once it reports ready, False on timeout.

        Window creation goes ahead after the timeout even if the server is
        still starting.
        """
        if importlib.util.find_spec(SERVER_MODULE) is None:
            raise ServerStartError(f"Server module {SERVER_MODULE} not found")
        try:
            self.server_proc = self.popen(
                [sys.executable, "-m", SERVER_MODULE],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                cwd=str(PROJECT_ROOT),
                env=self._server_env(),
            )
        except OSError as exc:
            raise ServerStartError(f"Failed to start server: {exc}") from exc

        threading.Thread(target=self._pump_server_output, name="server-output", daemon=True).start()
        ready = self.server_ready.wait(self.config.DIARY_SERVER_TIMEOUT)
        if not ready:
            logger.warning("Server did not report readiness within %ss", self.config.DIARY_SERVER_TIMEOUT)
        return ready

    def _pump_server_output(self) -> None:
        proc = self.server_proc
        stream = proc.stdout
        if stream is None:
            return
        for line in stream:
            logger.info("server: %s", line.rstrip())
            if READY_MARKER in line:
                self.server_ready.set()
        # before_quit may have cleared server_proc by now.
        logger.info("Server process exited with code %s", proc.wait())

    # ---- frontend ----

    def frontend_url(self) -> str:
        if self.dev_mode:
            return self.config.DIARY_DEV_URL
        return f"http://127.0.0.1:{self.config.DIARY_FRONTEND_PORT}/"

    def serve_frontend(self) -> None:
        """Serve the page app on a background thread (production mode only)."""
        if self.dev_mode or self.frontend_server is not None:
            return
        from reflectdiary.frontend import create_frontend_app

        app = create_frontend_app(os.environ.get("APP_ENV", "production"))
        self.frontend_server = make_server("127.0.0.1", self.config.DIARY_FRONTEND_PORT, app, threaded=True)
        threading.Thread(target=self.frontend_server.serve_forever, name="frontend", daemon=True).start()
        logger.info("Frontend served at %s", self.frontend_url())

    # ---- window ----

    def create_window(self):
        import tkinter as tk

        self.serve_frontend()
        url = self.frontend_url()

        root = tk.Tk()
        root.title(APP_TITLE)
        root.geometry("360x140")
        tk.Label(root, text=APP_TITLE, font=("TkDefaultFont", 14, "bold")).pack(pady=(16, 4))
        tk.Label(root, text=url).pack()
        tk.Button(root, text="Open diary", command=lambda: self.open_browser(url)).pack(pady=8)
        root.protocol("WM_DELETE_WINDOW", self.on_all_windows_closed)
        self.window = root

        self.open_browser(url)
        return root

    def on_all_windows_closed(self) -> None:
        # macOS apps stay alive with no windows; keep the launcher in the dock.
        if self.platform == "darwin":
            if self.window is not None:
                self.window.iconify()
            return
        self.quit()

    def before_quit(self) -> None:
        proc, self.server_proc = self.server_proc, None
        if proc is not None and proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=5)
            except subprocess.TimeoutExpired:
                proc.kill()
        if self.frontend_server is not None:
            self.frontend_server.shutdown()
            self.frontend_server = None

    def quit(self) -> None:
        self.before_quit()
        window, self.window = self.window, None
        if window is not None:
            window.destroy()

    def run(self) -> None:
        window = self.create_window()
        try:
            window.mainloop()
        finally:
            self.before_quit()


def show_error_dialog(title: str, message: str) -> None:
    import tkinter as tk
    from tkinter import messagebox

    root = tk.Tk()
    root.withdraw()
    messagebox.showerror(title, message)
    root.destroy()


def _log_uncaught(exc_type, exc, tb) -> None:
    logger.error("Uncaught exception", exc_info=(exc_type, exc, tb))


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.excepthook = _log_uncaught
    shell = DesktopShell()
    try:
        shell.start_server()
    except ServerStartError as exc:
        logger.error("Server start failed: %s", exc)
        show_error_dialog("Server error", f"Failed to start server: {exc}")
        return 1
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
