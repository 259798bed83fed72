from __future__ import annotations

import logging
import re
import shutil

from ..context import ExecutionContext
from ..lib.command import have_command, run_cmd, run_shell
from ..lib.dnf import dnf_install
from ..lib.files import write_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

OH_MY_ZSH_INSTALLER = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"

ZSH_REPOS = {
    "themes/powerlevel10k": ["git", "clone", "--depth=1", "https://github.com/romkatv/powerlevel10k.git"],
    "plugins/zsh-autosuggestions": ["git", "clone", "https://github.com/zsh-users/zsh-autosuggestions"],
    "plugins/zsh-syntax-highlighting": ["git", "clone", "https://github.com/zsh-users/zsh-syntax-highlighting"],
}

ZSH_THEME_LINE = 'ZSH_THEME="powerlevel10k/powerlevel10k"'
PLUGINS_LINE = "plugins=(git zsh-autosuggestions zsh-syntax-highlighting)"

CUSTOM_MARKER = "# --- Custom Configs ---"
CUSTOM_BLOCK = f"""
{CUSTOM_MARKER}
ZSH_AUTOSUGGEST_HIGHLIGHT_STYLE="fg=#8a8a8a"

# bat alias
command -v bat >/dev/null 2>&1 && alias cat='bat --paging=never --style=plain'

# eza alias
command -v eza >/dev/null 2>&1 && alias ls='eza --group-directories-first --classify --icons --git'
"""


def configure_zshrc(text: str) -> str:
    """Set theme and plugins, and append the custom block once."""

    if re.search(r"^ZSH_THEME=.*$", text, flags=re.MULTILINE):
        text = re.sub(r"^ZSH_THEME=.*$", ZSH_THEME_LINE, text, flags=re.MULTILINE)
    else:
        text = text.rstrip("\n") + ("\n" if text else "") + ZSH_THEME_LINE + "\n"

    if re.search(r"^plugins=\(.*\)$", text, flags=re.MULTILINE):
        text = re.sub(r"^plugins=\(.*\)$", PLUGINS_LINE, text, flags=re.MULTILINE)
    else:
        text = text.rstrip("\n") + "\n" + PLUGINS_LINE + "\n"

    if CUSTOM_MARKER not in text:
        text = text.rstrip("\n") + "\n" + CUSTOM_BLOCK
    return text


class SetupShellStep:
    step_id = "setup_shell"
    display_name = "ZSH + Powerlevel10k"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing ZSH...")
        dry_run = ctx.dry_run
        dnf_install(["zsh", "curl", "git", "fontconfig"], dry_run=dry_run)

        omz = ctx.home / ".oh-my-zsh"
        if not omz.is_dir():
            installer = f'sh -c "$(curl -fsSL {OH_MY_ZSH_INSTALLER})" "" --unattended'
            run_shell(installer, interactive=True, dry_run=dry_run)

        custom = omz / "custom"
        for rel, argv in ZSH_REPOS.items():
            dest = custom / rel
            if dest.exists():
                continue
            run_cmd([*argv, str(dest)], check=False, dry_run=dry_run)

        tools.vault.snapshot(ctx.zshrc)
        try:
            current = ctx.zshrc.read_text(encoding="utf-8")
        except FileNotFoundError:
            current = ""
        write_text(ctx.zshrc, configure_zshrc(current), dry_run=dry_run)

        if tools.gate.ask("Set ZSH as default shell?", default_yes=True):
            zsh = shutil.which("zsh") or "/usr/bin/zsh"
            run_cmd(["chsh", "-s", zsh], check=False, interactive=True, dry_run=dry_run)

        if dry_run:
            return StepResult.OK

        ok = True
        if not have_command("zsh"):
            logger.warning("Validation failed: ZSH installed")
            ok = False
        if not omz.is_dir():
            logger.warning("Validation failed: Oh My ZSH")
            ok = False
        return StepResult.OK if ok else StepResult.ISSUES
