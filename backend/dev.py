"""Local helper: `python dev.py install|migrate|test|run|all` from backend/."""
import subprocess
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent
PROJECT_ROOT = BACKEND.parent

COMMANDS = {
    "install": "pip install -e .[test] into the current interpreter",
    "migrate": "alembic upgrade head",
    "test": "run the pytest suite",
    "run": "start uvicorn with reload on :8000",
    "all": "install + migrate + test",
}


def step(title: str, cmd: list[str], cwd: Path = BACKEND) -> None:
    print(f"\n== {title} ==\n> {' '.join(cmd)}")
    subprocess.check_call(cmd, cwd=str(cwd))


def install() -> None:
    step("Installing echowrite-backend", [sys.executable, "-m", "pip", "install", "-e", ".[test]"], cwd=PROJECT_ROOT)


def migrate() -> None:
    step("Migrating database", [sys.executable, "-m", "alembic", "upgrade", "head"])


def test() -> None:
    step("Running tests", [sys.executable, "-m", "pytest"], cwd=PROJECT_ROOT)


def run() -> None:
    # uvicorn blocks until interrupted
    step("Serving http://127.0.0.1:8000 (docs at /docs)", [
        sys.executable, "-m", "uvicorn", "echowrite.main:app", "--reload", "--port", "8000",
    ])


def main() -> None:
    cmd = sys.argv[1].lower().strip() if len(sys.argv) > 1 else ""
    if cmd not in COMMANDS:
        print("Commands:")
        for name, help_text in COMMANDS.items():
            print(f"  python dev.py {name:<8} # {help_text}")
        raise SystemExit(1)

    if cmd == "all":
        install()
        migrate()
        test()
    else:
        {"install": install, "migrate": migrate, "test": test, "run": run}[cmd]()


if __name__ == "__main__":
    main()
