"""
Unit tests for the virus scanning stage.

The clamd network client is patched; no ClamAV daemon is required.
"""
from unittest.mock import patch

import pytest

from upload_service.exceptions import (
    ConfigurationError,
    InfectedFileError,
    ScanFailedError,
    ScannerMisconfiguredError,
)
from upload_service.policy import ClamAVConfig, VirusScanConfig, VirusScanSettings
from upload_service.processing.scanning import ClamAVScanner, scan_for_viruses

CLAMD_CLIENT = "upload_service.processing.scanning.clamd.ClamdNetworkSocket"

VIRUS_CONFIG = VirusScanConfig(
    enabled=True,
    config=VirusScanSettings(clamav=ClamAVConfig(host="clamav", port=3310)),
)


def test_clean_file_passes():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {"stream": ("OK", None)}

        scan_for_viruses(b"hello", VIRUS_CONFIG)

    client_class.assert_called_once_with(host="clamav", port=3310, timeout=60)
    client_class.return_value.instream.assert_called_once()


def test_streams_file_bytes():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {"stream": ("OK", None)}

        scan_for_viruses(b"payload bytes", VIRUS_CONFIG)

    stream = client_class.return_value.instream.call_args.args[0]
    stream.seek(0)
    assert stream.read() == b"payload bytes"


def test_infected_file_raises_with_signatures():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {
            "stream": ("FOUND", "Eicar-Test-Signature")
        }

        with pytest.raises(InfectedFileError) as exc:
            scan_for_viruses(b"X5O!P%@AP", VIRUS_CONFIG)

    assert exc.value.viruses == ["Eicar-Test-Signature"]
    assert "Eicar-Test-Signature" in str(exc.value)


def test_transport_failure_raises_scan_failed():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.side_effect = ConnectionRefusedError("refused")

        with pytest.raises(ScanFailedError) as exc:
            scan_for_viruses(b"hello", VIRUS_CONFIG)

    assert "Virus scan failed" in str(exc.value)
    assert isinstance(exc.value.__cause__, ConnectionRefusedError)


def test_engine_error_verdict_raises_scan_failed():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {
            "stream": ("ERROR", "INSTREAM size limit exceeded")
        }

        with pytest.raises(ScanFailedError) as exc:
            scan_for_viruses(b"hello", VIRUS_CONFIG)

    assert "size limit" in str(exc.value)


def test_missing_clamav_config_raises_at_call_time():
    virus = VirusScanConfig(enabled=True, config=None)

    with patch(CLAMD_CLIENT) as client_class:
        with pytest.raises(ScannerMisconfiguredError) as exc:
            scan_for_viruses(b"hello", virus)

    assert isinstance(exc.value, ConfigurationError)
    client_class.assert_not_called()


def test_missing_clamav_endpoint_in_settings():
    virus = VirusScanConfig(enabled=True, config=VirusScanSettings(clamav=None))

    with pytest.raises(ScannerMisconfiguredError):
        scan_for_viruses(b"hello", virus)


def test_scanner_returns_verdict():
    scanner = ClamAVScanner(ClamAVConfig(host="localhost", port=3310), timeout=5)

    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {"stream": ("FOUND", "Win.Test")}
        result = scanner.scan(b"data")

    assert result.is_infected is True
    assert result.viruses == ["Win.Test"]
    client_class.assert_called_once_with(host="localhost", port=3310, timeout=5)


def test_no_verdict_raises_scan_failed():
    """clamd hung up after the payload: instream() returns None"""
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = None

        with pytest.raises(ScanFailedError) as exc:
            scan_for_viruses(b"hello", VIRUS_CONFIG)

    assert "no verdict" in str(exc.value)


def test_response_without_stream_key_raises_scan_failed():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.return_value = {}

        with pytest.raises(ScanFailedError):
            scan_for_viruses(b"hello", VIRUS_CONFIG)


def test_unexpected_client_error_raises_scan_failed():
    with patch(CLAMD_CLIENT) as client_class:
        client_class.return_value.instream.side_effect = UnicodeDecodeError(
            "utf-8", b"\xff", 0, 1, "invalid start byte"
        )

        with pytest.raises(ScanFailedError) as exc:
            scan_for_viruses(b"hello", VIRUS_CONFIG)

    assert isinstance(exc.value.__cause__, UnicodeDecodeError)
