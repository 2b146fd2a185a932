from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from .errors import EmptyInputError, InvalidSymbolError, LengthMismatchError


@dataclass(frozen=True)
class FastaRecord:
    """A FASTA record (aligned sequence, gaps kept as '-')."""

    id: str
    sequence: str


def _parse_fasta_stream(handle: TextIO) -> Iterator[FastaRecord]:
    header: str | None = None
    seq_chunks: list[str] = []

    for raw in handle:
        line = raw.strip()
        if not line:
            continue

        if line.startswith(">"):
            if header is not None:
                yield FastaRecord(id=header, sequence="".join(seq_chunks).replace(" ", ""))
            parts = line[1:].split()
            header = parts[0] if parts else ""
            seq_chunks = []
        else:
            seq_chunks.append(line)

    if header is not None:
        yield FastaRecord(id=header, sequence="".join(seq_chunks).replace(" ", ""))


def read_fasta(path: str | Path, errors: str = "strict") -> Iterator[FastaRecord]:
    """Stream FASTA records from a file.

    `errors` is the UTF-8 decoding policy; "surrogateescape" keeps undecodable bytes
    so the caller can report which record holds them.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8", errors=errors) as f:
        yield from _parse_fasta_stream(f)


def _encoded_length(rec: FastaRecord, idx: int) -> int:
    try:
        rec.id.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidSymbolError(f"Record index {idx} has a header that is not valid UTF-8", index=idx) from None
    try:
        return len(rec.sequence.encode("ascii"))
    except UnicodeEncodeError as e:
        raise InvalidSymbolError(
            f"Record index {idx} ({rec.id}) has a non-ASCII symbol at column {e.start}", index=idx
        ) from None


def load_aligned_records(path: str | Path) -> list[FastaRecord]:
    """Read every record and check they all share the first record's length (in bytes)."""
    records = list(read_fasta(path, errors="surrogateescape"))
    if not records:
        raise EmptyInputError(f"No records found in {path}")

    first_len = _encoded_length(records[0], 0)
    for idx, rec in enumerate(records):
        rec_len = _encoded_length(rec, idx)
        if rec_len != first_len:
            raise LengthMismatchError(
                f"Record lengths don't match! FirstLen={first_len}, "
                f"got Len={rec_len} for record index {idx} ({rec.id})",
                index=idx,
                expected=first_len,
                actual=rec_len,
            )
    return records


def read_id_list(path: str | Path) -> list[str]:
    """One record ID per line; blank lines are skipped."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return [ln.strip() for ln in f if ln.strip()]


def write_id_list(path: str | Path, ids: Iterable[str]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="\n") as f:
        for rid in ids:
            rid = str(rid).strip()
            if rid:
                f.write(rid + "\n")
    return p
