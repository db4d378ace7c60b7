"""Development server for Folio.

Serves the built site with live reload:
- Redirects directory URLs without a trailing slash (``/blog`` -> ``/blog/``).
- Serves ``index.html`` for directories and a 404 (``404.html`` when present) otherwise.
- Injects a reload script into HTML responses.
- Watches content, templates, styles and public files and rebuilds on change.

Key classes:
- DevServer: Main class for running the development server.
- _ReloadHandler: HTTP request handler that injects the reload script.
- _ChangeHandler: File system event handler for triggering rebuilds.
"""

from __future__ import annotations

import asyncio
import functools
import json
import os
import shutil
import threading
import time
import webbrowser
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

import websockets
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .build import BuildError, build_site
from .config import CONFIG_FILENAME, load_config


class _ReloadHandler(SimpleHTTPRequestHandler):
    """HTTP request handler that injects live reload script into HTML pages.

    Attributes:
        reload_script: JavaScript code for WebSocket connection to trigger reloads.
    """

    reload_script_template = """
    <script>
    (() => {{
      const ws = new WebSocket('ws://' + location.hostname + ':{ws_port}');
      ws.onmessage = (event) => {{
        const data = JSON.parse(event.data || '{{}}');
        if (data.type === 'reload') location.reload();
      }};
    }})();
    </script>
    """
    reload_script = reload_script_template.format(ws_port=3001)

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        super().end_headers()

    def list_directory(self, path):  # pragma: no cover - exercised via send_head
        return self._serve_404()

    def _inject(self, content: str) -> str:
        if "</body>" in content:
            return content.replace("</body>", f"{self.reload_script}</body>")
        return content + self.reload_script

    def _send_html(self, status: int, content: str) -> None:
        encoded = self._inject(content).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(encoded)

    def _serve_404(self):
        """Serve 404.html (when present) with injected reload script and a 404 status."""
        error_page = Path(self.directory) / "404.html"
        if error_page.exists():
            self._send_html(404, error_page.read_text(encoding="utf-8"))
            return None
        self.send_error(404, "File not found")
        return None

    def _redirect_to_slash(self):
        parts = urlsplit(self.path)
        location = urlunsplit(
            (parts.scheme, parts.netloc, parts.path + "/", parts.query, parts.fragment)
        )
        self.send_response(301)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()
        return None

    def send_head(self):
        path_obj = Path(self.translate_path(self.path))
        if path_obj.is_dir():
            if not urlsplit(self.path).path.endswith("/"):
                return self._redirect_to_slash()
            index_path = path_obj / "index.html"
            if not index_path.exists():
                return self._serve_404()
            path_obj = index_path
        elif not path_obj.exists():
            return self._serve_404()

        if path_obj.suffix == ".html":
            self._send_html(200, path_obj.read_text(encoding="utf-8"))
            return None
        return super().send_head()


class DevServer:
    """Development server with live reload functionality.

    Attributes:
        project_root: Root directory of the project.
        config: Site configuration.
        output_dir: Directory where built site is served.
        ws_port: Port for WebSocket connections.
        http_port: Port for HTTP server.
    """

    def __init__(
        self, project_root: Path, http_port: int | None = None, ws_port: int | None = None
    ):
        """Initialize the development server.

        Args:
            project_root: Root directory of the project.
            http_port: Optional override for HTTP port.
            ws_port: Optional override for the websocket port (defaults to HTTP port + 1).
        """
        self.project_root = project_root
        self.config = load_config(project_root)
        self.output_dir = self.config.output_dir
        self._staging_dir = self.output_dir.with_name(self.output_dir.name + ".staging")
        self._retired_dir = self.output_dir.with_name(self.output_dir.name + ".old")
        self.http_port = int(http_port or self.config.port)
        self.ws_port = ws_port if ws_port is not None else self.http_port + 1
        self._reload_script = _ReloadHandler.reload_script_template.format(
            ws_port=self.ws_port
        )
        self._observer: Observer | None = None
        self._ws_clients: set = set()
        self._loop = asyncio.new_event_loop()
        self._rebuilding = False
        self._last_rebuild_at = 0.0
        self._last_signature: tuple | None = None
        self._debounce_seconds = 0.05
        self._post_build_delay = 0.05

    @property
    def url(self) -> str:
        return f"http://localhost:{self.http_port}/"

    def watch_paths(self) -> list[Path]:
        """Return the source directories whose changes trigger a rebuild."""
        return [
            self.config.content_dir,
            self.config.templates_dir,
            self.config.styles_dir,
            self.config.public_dir,
        ]

    def start(self, open_browser: bool = False) -> None:  # pragma: no cover - integration path
        self._build_into_output()
        self._last_signature = self._compute_signature()
        threading.Thread(target=self._start_http, daemon=True).start()
        threading.Thread(target=self._start_ws, daemon=True).start()
        self._start_watcher()
        if open_browser:
            webbrowser.open(self.url)
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()
        self._loop.call_soon_threadsafe(self._loop.stop)

    def _build_into_output(self) -> None:
        """Build into a staging directory, then swap it into place."""
        staging = self._prepare_staging_dir()
        build_site(
            self.project_root,
            config=self.config,
            clean_output=True,
            output_dir_override=staging,
        )
        self._activate_staging(staging)

    def _start_http(self) -> None:  # pragma: no cover - integration path
        handler_cls = type(
            "_ReloadHandlerWithPort",
            (_ReloadHandler,),
            {"reload_script": self._reload_script},
        )
        handler = functools.partial(handler_cls, directory=str(self.output_dir))
        httpd = ThreadingHTTPServer(("", self.http_port), handler)
        print(f"Serving {self.output_dir} at {self.url}")
        httpd.serve_forever()

    def _start_ws(self) -> None:  # pragma: no cover - integration path
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._run_ws_server())
        except OSError as exc:
            print(f"WebSocket server failed to start (port {self.ws_port}): {exc}")
            return

    async def _run_ws_server(self) -> None:  # pragma: no cover - integration path
        async with websockets.serve(self._ws_handler, "0.0.0.0", self.ws_port):
            await asyncio.Future()

    async def _ws_handler(self, websocket):
        self._ws_clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            self._ws_clients.discard(websocket)

    def _broadcast_reload(self):
        message = json.dumps({"type": "reload"})
        asyncio.run_coroutine_threadsafe(self._async_broadcast(message), self._loop)

    async def _async_broadcast(self, message: str):
        stale = set()
        for ws in self._ws_clients:
            try:
                await ws.send(message)
            except Exception:
                stale.add(ws)
        for ws in stale:
            self._ws_clients.discard(ws)

    def _start_watcher(self) -> None:
        handler = _ChangeHandler(self)
        observer = Observer()
        for watch_path in self.watch_paths():
            if watch_path.exists():
                observer.schedule(handler, str(watch_path), recursive=True)
        # folio.yaml lives in the project root
        observer.schedule(handler, str(self.project_root), recursive=False)
        observer.start()
        self._observer = observer

    def rebuild(self) -> None:
        now = time.time()
        if self._rebuilding or (now - self._last_rebuild_at) < self._debounce_seconds:
            return
        signature = self._compute_signature()
        if signature is not None and signature == self._last_signature:
            return
        self._rebuilding = True
        try:
            print("Change detected; rebuilding...")
            self.config = load_config(self.project_root)
            try:
                self._build_into_output()
            except BuildError as exc:
                print(f"Build failed: {exc}")
                return
            self._last_signature = signature
            if self._post_build_delay:
                time.sleep(self._post_build_delay)
            self._broadcast_reload()
        finally:
            self._rebuilding = False
            self._last_rebuild_at = time.time()

    def _compute_signature(self) -> tuple | None:
        entries: list[tuple] = []
        roots = [path for path in self.watch_paths() if path.exists()]
        config_file = self.project_root / CONFIG_FILENAME
        candidates = [config_file] if config_file.exists() else []
        for root in roots:
            candidates.extend(sorted(root.rglob("*")))
        for path in candidates:
            if path.is_dir():
                continue
            try:
                stat = path.stat()
            except OSError:
                continue
            entries.append((str(path), stat.st_mtime_ns, stat.st_size))
        return tuple(entries) if entries else None

    def _prepare_staging_dir(self) -> Path:
        staging = self._staging_dir
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True, exist_ok=True)
        return staging

    def _activate_staging(self, staging: Path) -> None:
        """Swap the staging build in by renames so the output path is never half-deleted."""
        target = self.output_dir
        retired = self._retired_dir
        if retired.exists():
            shutil.rmtree(retired)
        if target.exists():
            os.replace(target, retired)
        os.replace(staging, target)
        if retired.exists():
            shutil.rmtree(retired)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, server: DevServer):
        super().__init__()
        self.server = server

    def on_any_event(self, event):
        if event.is_directory:
            return
        path = Path(event.src_path)
        for ignored in (
            self.server.output_dir,
            self.server._staging_dir,
            self.server._retired_dir,
        ):
            try:
                path.relative_to(ignored)
                return
            except ValueError:
                pass
        if path.parent == self.server.project_root and path.name != CONFIG_FILENAME:
            return
        self.server.rebuild()
