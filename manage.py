#!/usr/bin/env python3
"""
Ledgerbook management CLI.

Usage:
    python manage.py start           Start the API server in the background
    python manage.py stop            Graceful shutdown
    python manage.py restart         Stop + start
    python manage.py dev             Run the API server with auto-reload
    python manage.py status          Check if server is running
    python manage.py export FILE     Write products, documents and counters to JSON
    python manage.py import FILE     Load a JSON export (e.g. from the browser tool)
"""

import argparse
import asyncio
import json
import os
import platform
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".ledgerbook.pid"
APP_PATH = "ledgerbook.api.main:app"

IS_WINDOWS = platform.system() == "Windows"


def _read_pid() -> int | None:
    """Read PID from the PID file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    """Check if a process with the given PID is running."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
            return str(pid) in result.stdout
        except OSError:
            return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _kill_pid(pid: int) -> bool:
    """Send termination signal to a process. Returns True if successful."""
    try:
        if IS_WINDOWS:
            subprocess.run(
                ["taskkill", "/PID", str(pid), "/T", "/F"],
                capture_output=True,
            )
        else:
            os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _is_port_free(port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def _stop_running() -> bool:
    """Stop the server recorded in the PID file. Returns False if none was running."""
    pid = _read_pid()
    if pid is None:
        return False

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid):
        for _ in range(30):
            if not _is_pid_alive(pid):
                break
            time.sleep(0.1)
        else:
            print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    print("Server stopped." if not _is_pid_alive(pid) else "Warning: Server may still be running.")
    return True


def _uvicorn_cmd(host: str, port: int, reload: bool = False) -> list[str]:
    # One worker only: the draft and the write lock live in process memory
    cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Start the server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        print(f"Error: Port {args.port} is already in use.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    kwargs: dict = {"cwd": str(ROOT_DIR)}
    if IS_WINDOWS:
        kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP
    proc = subprocess.Popen(_uvicorn_cmd(args.host, args.port), **kwargs)

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}/api")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    if not _stop_running():
        print("Server is not running.")


def cmd_restart(args: argparse.Namespace) -> None:
    """Stop then start the server."""
    _stop_running()
    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the server in the foreground with auto-reload."""
    print(f"Starting backend on {args.host}:{args.port} (reload mode)...")
    proc = subprocess.Popen(_uvicorn_cmd(args.host, args.port, reload=True), cwd=str(ROOT_DIR))
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(args.port):
        print(f"No PID file. Port {args.port} is in use by another process.")
    else:
        print(f"Server is not running (port {args.port} is free).")


async def _export_state(path: Path) -> int:
    from ledgerbook.infrastructure.storage.sqlite import close_pool
    from ledgerbook.infrastructure.storage.sqlite.state_transfer import export_state

    try:
        state = await export_state()
    finally:
        await close_pool()

    path.write_text(json.dumps(state, ensure_ascii=False, indent=2), encoding="utf-8")
    return len(state)


async def _import_state(path: Path):
    from ledgerbook.infrastructure.storage.sqlite import close_pool
    from ledgerbook.infrastructure.storage.sqlite.state_transfer import import_state

    data = json.loads(path.read_text(encoding="utf-8"))
    try:
        return await import_state(data)
    finally:
        await close_pool()


def cmd_export(args: argparse.Namespace) -> None:
    """Export persisted state to a JSON file."""
    count = asyncio.run(_export_state(Path(args.file)))
    print(f"Exported {count} keys to {args.file}.")


def cmd_import(args: argparse.Namespace) -> None:
    """Import persisted state from a JSON file."""
    from ledgerbook.core.exceptions import ValidationError

    if _read_pid() is not None:
        print("Error: Stop the server before importing.")
        sys.exit(1)
    try:
        result = asyncio.run(_import_state(Path(args.file)))
    except ValidationError as e:
        print(f"Error: {args.file} was not imported, nothing was changed: {e.message}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: Could not import {args.file}: {e}")
        sys.exit(1)

    print(f"Imported {len(result.imported)} keys from {args.file}.")
    if result.ignored:
        print(f"Ignored unknown keys: {', '.join(result.ignored)}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Ledgerbook management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func, help_text in (
        ("start", cmd_start, "Start the server"),
        ("restart", cmd_restart, "Restart the server"),
        ("dev", cmd_dev, "Start the server with auto-reload"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
        p.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
        p.set_defaults(func=func)

    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    p_export = sub.add_parser("export", help="Export state to JSON")
    p_export.add_argument("file", help="Output file")
    p_export.set_defaults(func=cmd_export)

    p_import = sub.add_parser("import", help="Import state from JSON")
    p_import.add_argument("file", help="Input file")
    p_import.set_defaults(func=cmd_import)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
