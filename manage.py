#!/usr/bin/env python3
"""
SmartSupply management CLI.

Usage:
    python manage.py start       Apply migrations & start server
    python manage.py stop        Graceful shutdown
    python manage.py restart     Stop + start
    python manage.py dev         Server with auto-reload (foreground)
    python manage.py status      Check if server is running
    python manage.py migrate     Apply pending migrations
    python manage.py seed        Load sample data (--seed N)
"""

import argparse
import os
import platform
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".smartsupply.pid"
APP_PATH = "smartsupply.api.main:app"

IS_WINDOWS = platform.system() == "Windows"


def _read_pid() -> int | None:
    """Read PID from the pid file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    # Stale PID file
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
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
        else:
            os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _wait_for_exit(pid: int, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not _is_pid_alive(pid):
            return True
        time.sleep(0.1)
    return not _is_pid_alive(pid)


def _is_port_free(port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def _run_module(module: str, *args: str) -> int:
    """Run a package module in a child interpreter from the project root."""
    return subprocess.run([sys.executable, "-m", module, *args], cwd=str(ROOT_DIR)).returncode


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending schema migrations."""
    extra = ["--status"] if args.status else []
    if _run_module("smartsupply.infrastructure.storage.sqlite.migrations.migrator", *extra) != 0:
        sys.exit(1)


def cmd_seed(args: argparse.Namespace) -> None:
    """Load the sample data set."""
    code = _run_module(
        "smartsupply.tools.seed",
        "--seed", str(args.seed),
        "--orders", str(args.orders),
    )
    if code != 0:
        sys.exit(code)


def cmd_start(args: argparse.Namespace) -> None:
    """Start the server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        print(f"Error: Port {args.port} is in use.")
        sys.exit(1)

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.workers and args.workers > 1:
        uvicorn_cmd += ["--workers", str(args.workers)]

    print(f"Starting server on {args.host}:{args.port}...")

    if IS_WINDOWS:
        proc = subprocess.Popen(
            uvicorn_cmd,
            cwd=str(ROOT_DIR),
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
        )
    else:
        proc = subprocess.Popen(uvicorn_cmd, cwd=str(ROOT_DIR))

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}")
    print(f"  Health:   http://{args.host}:{args.port}/health")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid) and not _wait_for_exit(pid):
        print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    if not _is_pid_alive(pid):
        print("Server stopped.")
    else:
        print("Warning: Server may still be running.")


def cmd_restart(args: argparse.Namespace) -> None:
    """Stop then start the server."""
    cmd_stop(args)
    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the server in the foreground with --reload."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        APP_PATH,
        "--reload",
        "--host", args.host,
        "--port", str(args.port),
    ]
    print(f"Starting backend on {args.host}:{args.port} (reload mode)...")
    try:
        subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        print("\nDev server stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(args.port):
        print(f"No PID file. Port {args.port} is in use by another process.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def _add_server_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="SmartSupply management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # start
    p_start = sub.add_parser("start", help="Start server in the background")
    _add_server_args(p_start)
    p_start.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_start.set_defaults(func=cmd_start)

    # stop
    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    # restart
    p_restart = sub.add_parser("restart", help="Restart the server")
    _add_server_args(p_restart)
    p_restart.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_restart.set_defaults(func=cmd_restart)

    # dev
    p_dev = sub.add_parser("dev", help="Start server with auto-reload")
    _add_server_args(p_dev)
    p_dev.set_defaults(func=cmd_dev)

    # status
    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=8080, help="Port to check (default: 8080)")
    p_status.set_defaults(func=cmd_status)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--status", action="store_true", help="Only show migration status")
    p_migrate.set_defaults(func=cmd_migrate)

    # seed
    p_seed = sub.add_parser("seed", help="Load sample data into an empty database")
    p_seed.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p_seed.add_argument("--orders", type=int, default=20, help="Purchase orders to create")
    p_seed.set_defaults(func=cmd_seed)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
