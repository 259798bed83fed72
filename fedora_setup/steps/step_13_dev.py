from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib.command import have_command, run_cmd
from ..lib.dnf import dnf_install
from ..lib.files import append_text
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

DEV_PACKAGES = [
    "bc", "bison", "ccache", "curl", "flex", "git", "git-lfs", "gnupg", "gperf", "ImageMagick",
    "protobuf-compiler", "python3-protobuf", "libxml2", "libxslt", "lzop", "lz4", "pngcrush",
    "rsync", "schedtool", "squashfs-tools", "zip", "openssl-devel", "zlib-devel",
    "elfutils-libelf-devel", "elfutils-devel", "gnutls-devel", "sdl12-compat-devel",
    "glibc-devel.i686", "libstdc++-devel.i686", "zlib-ng-compat-devel.i686", "libX11-devel.i686",
    "readline-devel.i686", "ncurses-devel.i686", "meson", "ninja-build", "automake", "autoconf",
    "libtool", "pkg-config", "cmake-gui", "cmake-fedora", "gdb", "valgrind", "strace", "ltrace",
    "clang-tools-extra", "bear", "python3-devel", "python3-virtualenv", "python3-wheel",
    "python3-setuptools",
]

RUST_PACKAGES = ["rust", "cargo", "rustup", "rustfmt", "clippy", "rust-analyzer"]


class SetupDevStep:
    step_id = "setup_dev"
    display_name = "Development Tools"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        logger.info("Installing dev tools...")
        dry_run = ctx.dry_run
        dnf_install(DEV_PACKAGES, dry_run=dry_run)

        if dry_run or have_command("ccache"):
            run_cmd(["ccache", "--set-config=max_size=50G"], check=False, dry_run=dry_run)
            run_cmd(["ccache", "--set-config=compression=true"], check=False, dry_run=dry_run)
            cache_dir = ctx.home / ".ccache"
            conf = cache_dir / "ccache.conf"
            line = f"cache_dir = {cache_dir}\n"
            try:
                present = line in conf.read_text(encoding="utf-8")
            except OSError:
                present = False
            if not present:
                append_text(conf, line, dry_run=dry_run)
            logger.info("ccache configured: 50G max, compression enabled")

        if tools.gate.ask("Install Rust toolchain?", default_yes=False):
            dnf_install(RUST_PACKAGES, dry_run=dry_run)
        return StepResult.OK
