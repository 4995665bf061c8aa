"""YAML file storage layer for tapes.

Each tape is one YAML file under the tape directory holding a single
``http_interactions`` key with the ordered persisted records. Saving
redacts, encodes and overwrites the whole file; loading parses,
validates and decodes every record, aborting on the first failure.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from tapedeck.codec.document import dump_document
from tapedeck.codec.record import decode_record, encode_record
from tapedeck.errors import InvalidTapeName, IOFailure, TapeFormatError, TapeNotFound
from tapedeck.loader.validator import load_tape_document
from tapedeck.models.config import TapeConfig
from tapedeck.models.tape import TapeDocument, TapeRecord
from tapedeck.recording.redaction import redact_request_headers

logger = logging.getLogger(__name__)


class TapeStore:
    """Persist and load named tapes as YAML files.

    File layout:
        <tape_dir>/
            {name}.yml        # One tape; name may contain '/' subdirectories

    Writes go to a .tmp sibling which is then renamed over the target.
    There is no locking: concurrent writers to the same name must be
    serialized by the caller.
    """

    def __init__(
        self,
        tape_dir: Path,
        redact_headers: Iterable[str] | None = None,
        extension: str = "yml",
    ) -> None:
        self.tape_dir = Path(tape_dir)
        self.redact_headers = list(redact_headers or [])
        self.extension = extension

    @classmethod
    def from_config(cls, config: TapeConfig, project_root: Path) -> TapeStore:
        """Build a store from project configuration."""
        return cls(
            project_root / config.tape_dir,
            redact_headers=config.redact_headers,
            extension=config.extension,
        )

    def is_name_valid(self, name: str) -> bool:
        """Check that a tape name resolves strictly inside the tape directory.

        Rejects names that normalise to a parent-directory traversal,
        absolute paths outside the directory, and names that resolve to
        the directory itself. Names containing NUL are never valid paths.
        """
        if not name or "\x00" in name:
            return False
        tape_dir = os.fspath(self.tape_dir)
        relative = os.path.relpath(os.path.join(tape_dir, name), tape_dir)
        if relative in (os.curdir, os.pardir):
            return False
        return not relative.startswith(os.pardir + os.sep)

    def tape_path(self, name: str) -> Path:
        """Return the on-disk path of a tape."""
        return self.tape_dir / f"{name}.{self.extension}"

    def exists(self, name: str) -> bool:
        return self.is_name_valid(name) and self.tape_path(name).is_file()

    def save(self, name: str, records: Iterable[TapeRecord]) -> Path:
        """Redact, encode and write records as the tape called name.

        Redaction mutates each record's request headers in place.

        Args:
            name: Tape name, relative to the tape directory.
            records: Records in the order they should be replayed.

        Returns:
            Path of the written tape file.

        Raises:
            InvalidTapeName: If name escapes the tape directory.
            IOFailure: If the directory or file cannot be written.
        """
        self._check_name(name)
        document = TapeDocument(
            http_interactions=[
                encode_record(redact_request_headers(record, self.redact_headers))
                for record in records
            ]
        )
        content = dump_document(document.model_dump(mode="json", exclude_none=True))

        tape_file = self.tape_path(name)
        tmp_file = tape_file.with_name(f"{tape_file.name}.tmp")
        try:
            tape_file.parent.mkdir(parents=True, exist_ok=True)
            tmp_file.write_text(content, encoding="utf-8")
            tmp_file.replace(tape_file)
        except OSError as exc:
            logger.error("Failed to write tape %r to %s: %s", name, tape_file, exc)
            raise IOFailure(tape_file, str(exc)) from exc

        logger.info(
            "Saved tape %r (%d interactions) to %s",
            name,
            len(document.http_interactions),
            tape_file,
        )
        return tape_file

    def load(self, name: str) -> list[TapeRecord]:
        """Load and decode the tape called name.

        Raises:
            InvalidTapeName: If name escapes the tape directory.
            TapeNotFound: If no tape file exists for name.
            IOFailure: If the file exists but cannot be read.
            TapeFormatError: If the file is not a valid tape document.
            UnsupportedEncoding: If any body has an unknown encoding.
            RecompressionFailure: If any body cannot be re-compressed.
        """
        self._check_name(name)
        tape_file = self.tape_path(name)
        if not tape_file.is_file():
            raise TapeNotFound(name, tape_file)

        try:
            source = tape_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise TapeFormatError(
                message=f"Tape is not valid UTF-8: {exc}",
                filename=str(tape_file),
            ) from exc
        except OSError as exc:
            raise IOFailure(tape_file, str(exc)) from exc

        document = load_tape_document(source, filename=str(tape_file))
        records: list[TapeRecord] = []
        for index, persisted in enumerate(document.http_interactions):
            for label, body in (
                ("request", persisted.request.body),
                ("response", persisted.response.body),
            ):
                if body.compression in ("br", "gzip"):
                    logger.debug(
                        "Tape %r interaction %d: %s body re-compressed with %s; "
                        "bytes may differ from the capture",
                        name,
                        index,
                        label,
                        body.compression,
                    )
            records.append(decode_record(persisted))

        logger.info("Loaded tape %r (%d interactions)", name, len(records))
        return records

    def delete(self, name: str) -> bool:
        """Delete a tape file.

        Returns:
            True if the tape existed and was deleted, False otherwise.
        """
        self._check_name(name)
        tape_file = self.tape_path(name)
        if not tape_file.is_file():
            return False
        try:
            tape_file.unlink()
        except OSError as exc:
            raise IOFailure(tape_file, str(exc)) from exc
        return True

    def list_tapes(self) -> list[str]:
        """List tape names, including those in subdirectories.

        Returns:
            Sorted names using '/' as separator, without the extension.
        """
        if not self.tape_dir.is_dir():
            return []
        suffix = f".{self.extension}"
        return sorted(
            f.relative_to(self.tape_dir).as_posix().removesuffix(suffix)
            for f in self.tape_dir.rglob(f"*{suffix}")
            if f.is_file()
        )

    def _check_name(self, name: str) -> None:
        if not self.is_name_valid(name):
            raise InvalidTapeName(name)
