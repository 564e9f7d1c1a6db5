"""Development script to run checks (formatting, linting, tests) and the resolver."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Run the development checks and optionally resolve a theme."""
    parser = argparse.ArgumentParser(
        description="Run development checks and the asset resolver."
    )
    parser.add_argument(
        "--ci", action="store_true", help="Check without fixing and skip main.py"
    )
    parser.add_argument(
        "--theme", help="Theme directory to resolve once the checks pass"
    )
    args = parser.parse_args()

    if args.ci:
        run_command(["uv", "run", "ruff", "format", "--check"], "Ruff Format Check")
        run_command(["uv", "run", "ruff", "check"], "Ruff Linting")
        run_command(["uv", "run", "pytest"], "Tests")
        print("\n✅ CI checks passed successfully. Skipping execution of main.py.")
        return

    run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
    run_command(
        ["uv", "run", "ruff", "check", "--fix", "--unsafe-fixes"],
        "Ruff Linting & Fixes",
    )
    run_command(["uv", "run", "pytest"], "Tests")

    if args.theme:
        run_command(
            ["uv", "run", "python", "main.py", args.theme],
            "Main Entry Point",
        )

    print("\n✅ All development checks passed successfully.")


if __name__ == "__main__":
    main()
