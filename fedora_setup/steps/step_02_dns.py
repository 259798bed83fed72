from __future__ import annotations

import logging
import time
from typing import List

from ..context import ExecutionContext
from ..lib.command import run_cmd
from ..pipeline import StepResult, StepTools

logger = logging.getLogger(__name__)

DNS_PROVIDERS = {
    1: ("Google", "8.8.8.8 8.8.4.4", "2001:4860:4860::8888 2001:4860:4860::8844"),
    2: ("Cloudflare", "1.1.1.1 1.0.0.1", "2606:4700:4700::1111 2606:4700:4700::1001"),
}
SKIP_CHOICE = 3

VIRTUAL_PREFIXES = ("docker", "lo", "virbr", "veth", "br-")


def is_virtual_connection(name: str) -> bool:
    return name.startswith(VIRTUAL_PREFIXES)


def active_connections() -> List[str]:
    r = run_cmd(["nmcli", "-t", "-f", "NAME", "connection", "show", "--active"], check=False)
    if not r.ok:
        return []
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


class SetupDnsStep:
    step_id = "setup_dns"
    display_name = "DNS Configuration"
    services = ()

    def run(self, ctx: ExecutionContext, tools: StepTools) -> StepResult:
        # Interactive and network-disruptive; nothing useful to simulate.
        if ctx.dry_run:
            logger.info("[DRY-RUN] DNS configuration (interactive step skipped in dry-run)")
            return StepResult.OK

        logger.warning("DNS Configuration Warning")
        logger.info("This will override auto DNS for ALL active connections.")
        logger.info("It may break corporate/campus networks, VPN split DNS and DNS-over-TLS setups.")

        choice = tools.gate.choose(
            "Choose DNS provider",
            ["Google DNS (8.8.8.8, 8.8.4.4)", "Cloudflare DNS (1.1.1.1, 1.0.0.1)", "Skip (keep current DNS)"],
            default=SKIP_CHOICE,
        )
        if choice not in DNS_PROVIDERS:
            logger.info("Keeping current DNS settings")
            return StepResult.OK

        name, ipv4, ipv6 = DNS_PROVIDERS[choice]
        logger.info("Configuring %s DNS...", name)

        ok = True
        for conn in active_connections():
            if is_virtual_connection(conn):
                logger.info("Skipping virtual interface: %s", conn)
                continue
            logger.info("Setting DNS for: %s", conn)
            for family, servers in (("ipv4", ipv4), ("ipv6", ipv6)):
                r = run_cmd(
                    ["nmcli", "connection", "modify", conn, f"{family}.ignore-auto-dns", "yes", f"{family}.dns", servers],
                    check=False,
                )
                if not r.ok:
                    logger.warning("Failed to set %s DNS for %s", family, conn)
                    ok = False
            run_cmd(["nmcli", "connection", "down", conn], check=False)
            time.sleep(1)
            if not run_cmd(["nmcli", "connection", "up", conn], check=False).ok:
                logger.warning("Failed to restart %s", conn)
                ok = False

        return StepResult.OK if ok else StepResult.ISSUES
