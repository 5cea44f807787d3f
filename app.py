import subprocess
import sys
import time
import webbrowser
import os
import signal
import atexit
import uuid

_processes = []

FRONTEND_PORT = os.getenv("MOOD_JOURNAL_PORT", "8501")
CLIENT_ID_FILE = os.path.join(os.path.expanduser("~"), ".mood_journal", "launcher_client")


def launcher_client_id():
    """Same browser id on every launch, so the last login is resumed"""
    try:
        with open(CLIENT_ID_FILE, encoding="utf-8") as f:
            client_id = f.read().strip()
        if len(client_id) == 32:
            return client_id
    except OSError:
        pass
    client_id = uuid.uuid4().hex
    os.makedirs(os.path.dirname(CLIENT_ID_FILE), exist_ok=True)
    with open(CLIENT_ID_FILE, "w", encoding="utf-8") as f:
        f.write(client_id)
    return client_id


def cleanup():
    for proc in _processes:
        if proc.poll() is None:
            try:
                if sys.platform == "win32":
                    subprocess.run(
                        ["taskkill", "/F", "/T", "/PID", str(proc.pid)],
                        capture_output=True
                    )
                else:
                    os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
            except OSError:
                proc.kill()


def signal_handler(signum, frame):
    print("\n\nShutting down...")
    cleanup()
    sys.exit(0)


def main():
    print("\nStarting Mood Journal...\n")

    atexit.register(cleanup)
    signal.signal(signal.SIGINT, signal_handler)
    if sys.platform != "win32":
        signal.signal(signal.SIGTERM, signal_handler)

    root = os.path.dirname(os.path.abspath(__file__))
    frontend_dir = os.path.join(root, "frontend")

    popen_kwargs = {}
    if sys.platform != "win32":
        popen_kwargs["start_new_session"] = True

    print("Starting frontend...")
    frontend = subprocess.Popen(
        [
            sys.executable, "-m", "streamlit", "run", "app.py",
            "--server.headless", "true",
            "--server.port", FRONTEND_PORT,
        ],
        cwd=frontend_dir,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        **popen_kwargs,
    )
    _processes.append(frontend)

    url = f"http://localhost:{FRONTEND_PORT}/?client={launcher_client_id()}"
    print(f"\nFrontend: {url}")
    print(f"Journal service: {os.getenv('MOOD_JOURNAL_BACKEND_URL', 'http://localhost:8000')}")
    print("\nPress Ctrl+C to stop\n")

    time.sleep(2)
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        pass

    try:
        while True:
            if frontend.poll() is not None:
                print("Frontend stopped unexpectedly")
                break
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        cleanup()


if __name__ == "__main__":
    main()
