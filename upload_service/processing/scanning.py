"""
Virus scanning stage.

Streams file bytes to a ClamAV daemon over TCP (INSTREAM command) and
interprets the verdict. There is no bypass mode: if the daemon cannot be
reached or returns an error, the upload is aborted.
"""
import io
from dataclasses import dataclass, field

import clamd

from upload_service.exceptions import (
    InfectedFileError,
    ScanFailedError,
    ScannerMisconfiguredError,
)
from upload_service.logging_config import setup_logging
from upload_service.policy import ClamAVConfig, VirusScanConfig

logger = setup_logging()

# Socket timeout for the clamd connection (seconds)
CLAMD_TIMEOUT = 60


@dataclass
class ScanResult:
    is_infected: bool
    viruses: list[str] = field(default_factory=list)


class ClamAVScanner:
    """Thin wrapper around a clamd network client."""

    def __init__(self, clamav: ClamAVConfig, timeout: float = CLAMD_TIMEOUT):
        self.clamav = clamav
        self.timeout = timeout

    def scan(self, content: bytes) -> ScanResult:
        """
        Stream `content` to clamd and return the verdict.

        Raises:
            ScanFailedError: If clamd is unreachable, hangs up without a
                verdict or reports a scan error
        """
        try:
            client = clamd.ClamdNetworkSocket(
                host=self.clamav.host,
                port=self.clamav.port,
                timeout=self.timeout,
            )
            response = client.instream(io.BytesIO(content))
        except Exception as e:
            raise ScanFailedError(f"Virus scan failed: {str(e)}") from e

        # Response shape: {"stream": ("OK", None)} or {"stream": ("FOUND", "<signature>")}
        verdict = response.get("stream") if isinstance(response, dict) else None
        if not isinstance(verdict, (tuple, list)) or len(verdict) != 2:
            raise ScanFailedError("Virus scan failed: no verdict from clamd")

        status, signature = verdict

        if status == "OK":
            return ScanResult(is_infected=False)
        if status == "FOUND":
            return ScanResult(is_infected=True, viruses=[signature])

        raise ScanFailedError(f"Virus scan failed: {signature}")


def scan_for_viruses(content: bytes, virus: VirusScanConfig) -> None:
    """
    Scan file bytes and reject infected files.

    Args:
        content: File bytes to scan
        virus: Virus scanning policy block (must be enabled)

    Raises:
        ScannerMisconfiguredError: If no ClamAV endpoint is configured
        ScanFailedError: If the scan could not complete
        InfectedFileError: If the scanner found a virus
    """
    clamav = virus.config.clamav if virus.config else None
    if clamav is None:
        raise ScannerMisconfiguredError()

    result = ClamAVScanner(clamav).scan(content)

    if result.is_infected:
        logger.warning(f"Infected upload rejected: {', '.join(result.viruses)}")
        raise InfectedFileError(result.viruses)

    logger.debug(f"Virus scan clean ({len(content)} bytes)")
