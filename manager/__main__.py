"""
Manager 진입점

실행 방법:
    python -m manager show
"""

from manager.cli import run

if __name__ == "__main__":
    run()
