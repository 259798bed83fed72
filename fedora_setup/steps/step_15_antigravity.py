from __future__ import annotations

import json
import logging
from pathlib import Path

from ..context import ExecutionContext
from ..lib.command import have_command, run_cmd
from ..lib.files import write_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

REPO_FILE = Path("/etc/yum.repos.d/antigravity.repo")
REPO_TEXT = """[antigravity-rpm]
name=Antigravity RPM Repository
baseurl=https://us-central1-yum.pkg.dev/projects/antigravity-auto-updater-dev/antigravity-rpm
enabled=1
gpgcheck=0
"""

EXTENSIONS = [
    "bradlc.vscode-tailwindcss", "catppuccin.catppuccin-vsc", "christian-kohler.npm-intellisense",
    "dbaeumer.vscode-eslint", "devsense.composer-php-vscode", "devsense.intelli-php-vscode",
    "devsense.phptools-vscode", "devsense.profiler-php-vscode", "dsznajder.es7-react-js-snippets",
    "eamodio.gitlens", "esbenp.prettier-vscode", "formulahendry.code-runner", "golang.go",
    "hbenl.vscode-mocha-test-adapter", "hbenl.vscode-test-explorer",
    "llvm-vs-code-extensions.vscode-clangd", "meta.pyrefly", "ms-azuretools.vscode-containers",
    "ms-azuretools.vscode-docker", "ms-pyright.pyright", "ms-python.debugpy", "ms-python.python",
    "ms-python.vscode-python-envs", "ms-vscode.cmake-tools", "ms-vscode.cpptools-themes",
    "ms-vscode.live-server", "ms-vscode.test-adapter-converter", "ms-vscode.vscode-typescript-next",
    "redhat.java", "shopify.ruby-lsp", "vscjava.vscode-gradle", "vscjava.vscode-java-debug",
    "vscjava.vscode-java-dependency", "vscjava.vscode-java-pack", "vscjava.vscode-java-test",
    "vscjava.vscode-maven", "vscode-icons-team.vscode-icons",
]

EDITOR_SETTINGS = {
    "editor.fontFamily": "FiraCode Nerd Font, monospace",
    "editor.fontWeight": "600",
    "editor.fontLigatures": True,
    "editor.fontSize": 14,
    "editor.lineHeight": 1.6,
    "terminal.integrated.fontFamily": "FiraCode Nerd Font",
    "terminal.integrated.fontWeight": "600",
    "terminal.integrated.lineHeight": 1.2,
    "files.autoSave": "afterDelay",
}


class SetupAntigravityStep:
    step_id = "setup_antigravity"
    display_name = "Antigravity"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing Antigravity...")
        dry_run = ctx.dry_run
        write_text(REPO_FILE, REPO_TEXT, sudo=True, dry_run=dry_run)
        run_cmd(["dnf", "makecache"], sudo=True, check=False, dry_run=dry_run)
        run_cmd(["dnf", "install", "-y", "antigravity"], sudo=True, check=False, dry_run=dry_run)

        if not (dry_run or have_command("antigravity")):
            logger.warning("antigravity is not available after install")
            return StepResult.ISSUES

        logger.info("Installing Antigravity extensions...")
        argv = ["antigravity"]
        for ext in EXTENSIONS:
            argv += ["--install-extension", ext]
        result = StepResult.OK
        if not run_cmd(argv, check=False, dry_run=dry_run).ok:
            logger.warning("Some extensions failed")
            result = StepResult.ISSUES

        logger.info("Creating Antigravity settings...")
        settings = ctx.home / ".config/Antigravity/User/settings.json"
        write_text(settings, json.dumps(EDITOR_SETTINGS, indent=4) + "\n", dry_run=dry_run)
        return result
