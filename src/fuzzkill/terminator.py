"""Terminate selected processes via psutil."""

from collections.abc import Sequence

import psutil
import structlog

from fuzzkill import logging as console
from fuzzkill.records import ProcessRecord

log = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1


def _handle(record: ProcessRecord) -> psutil.Process:
    if record.handle is not None:
        return record.handle
    return psutil.Process(record.id)


def kill(
    records: Sequence[ProcessRecord],
    graceful: bool = False,
    wait_timeout: float = 3.0,
) -> int:
    """Signal every record and wait for them to exit.

    Args:
        records: Deduplicated selection
        graceful: Send SIGTERM (terminate) instead of SIGKILL
        wait_timeout: Seconds to wait for signalled processes to exit

    Returns:
        0 if every process is gone afterwards, 1 otherwise.
    """
    if not records:
        console.selection_cancelled()
        return EXIT_OK

    signalled: dict[int, tuple[psutil.Process, ProcessRecord]] = {}
    failed = 0

    for record in records:
        if not record.has_pid:
            log.warning("kill_failed", name=record.name, reason="unknown pid")
            console.kill_failed(record.name, record.id, "unknown pid")
            failed += 1
            continue
        try:
            proc = _handle(record)
            if graceful:
                proc.terminate()
            else:
                proc.kill()
        except psutil.NoSuchProcess:
            log.info("process_already_gone", pid=record.id, name=record.name)
            console.process_already_gone(record.name, record.id)
            continue
        except psutil.AccessDenied:
            log.warning("kill_failed", pid=record.id, name=record.name, reason="access denied")
            console.kill_failed(record.name, record.id, "access denied")
            failed += 1
            continue
        signalled[proc.pid] = (proc, record)

    killed = 0
    if signalled:
        procs = [proc for proc, _ in signalled.values()]
        gone, alive = psutil.wait_procs(procs, timeout=wait_timeout)
        for proc in gone:
            record = signalled[proc.pid][1]
            log.info("process_killed", pid=record.id, name=record.name, graceful=graceful)
            console.process_killed(record.name, record.id)
            killed += 1
        for proc in alive:
            record = signalled[proc.pid][1]
            log.warning("kill_failed", pid=record.id, name=record.name, reason="still running")
            console.kill_failed(record.name, record.id, f"still running after {wait_timeout}s")
            failed += 1

    console.kill_summary(killed, failed)
    return EXIT_FAILED if failed else EXIT_OK
