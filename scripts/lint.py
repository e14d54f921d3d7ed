"""
Lint script runner.
"""
import subprocess


def main():
    """
    Lint the GS project using flake8 and pylint.
    """
    print("Running flake8...")
    subprocess.run([
        "flake8",
        "./gslang",
        "./gs.py",
        "--exclude=gslang/tests",
        "--max-line-length=120"
    ], check=True)

    print("Running pylint...")
    subprocess.run([
        "pylint",
        "./gslang",
        "./gs.py",
        "--ignore=tests"
    ], check=True)


if __name__ == "__main__":
    main()
