# SPDX-License-Identifier: MIT

from idletrack.cleanup import register_cleanup
from idletrack.initialize import initialize
from idletrack.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
