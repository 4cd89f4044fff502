"""
Dev Machine Example - install a tool and drop a config file.

Run from this directory:
    wizard list
    wizard apply
    wizard --debug rollback
"""

import platform
from pathlib import Path

from wizard import Playbook, shell

playbook = Playbook("dev-machine")

SKAFFOLD_URL = "https://storage.googleapis.com/skaffold/releases/latest/skaffold-{os}-{arch}"

# Downloads are slow: only run when skaffold is missing
install_skaffold = playbook.task("install_skaffold", description="Install the skaffold CLI")


@install_skaffold.when
def _():
    return not shell.command_exists("skaffold")


@install_skaffold.do
def _():
    os_name = platform.system().lower()
    arch = "arm64" if platform.machine() in ("arm64", "aarch64") else "amd64"
    shell.run(f"curl -Lo /tmp/skaffold {SKAFFOLD_URL.format(os=os_name, arch=arch)}")
    shell.run(["sudo", "install", "/tmp/skaffold", "/usr/local/bin/skaffold"])


@install_skaffold.undo
def _():
    shell.run(["sudo", "rm", "-f", "/usr/local/bin/skaffold"])


# Idempotent on its own: no need for a when predicate
TEST_FILE = Path.home() / "test"

playbook.task(
    "configure_something",
    description="Write ~/test",
    do=lambda: TEST_FILE.write_text("test\n"),
    undo=lambda: TEST_FILE.unlink(missing_ok=True),
)
