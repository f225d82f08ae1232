"""
Huffman codebook report for space + lowercase letters

Counts how often each of the 27 symbols (' ', 'a'..'z') occurs in a text file,
builds a Huffman code from those counts, and compares the bits needed for the
first N characters against plain 7-bit ASCII.

Outputs:
  - out.txt         (codebook, then code + running totals per character)
  - totals.csv      (optional, --csv)
  - totals.png      (optional, --plot)

How to run:
  python report.py merchant.txt --length 500
  python report.py merchant.txt --length 500 --csv totals.csv --plot totals.png
  python report.py merchant.txt --show-heap       # prompts for the length
"""

from __future__ import annotations

import argparse
import csv
import logging
import string
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from heap import MinHeap
import huffman as huff

logger = logging.getLogger(__name__)

ALPHABET = " " + string.ascii_lowercase
FIXED_WIDTH = 7 # bits per character in the ASCII baseline


# Input helpers

def read_text(path: Path, fold_case: bool = False) -> str:
    text = path.read_text(encoding="utf-8", errors="replace")
    text = text.replace("\r", "").replace("\n", "")
    return text.lower() if fold_case else text

def filter_alphabet(text: str, alphabet: str = ALPHABET) -> str:
    allowed = set(alphabet)
    return "".join(ch for ch in text if ch in allowed)

def freq_table(text: str, alphabet: str = ALPHABET) -> List[Tuple[str, int]]:
    # every alphabet member gets an entry, even with a zero count
    ft: Dict[str, int] = {ch: 0 for ch in alphabet}
    for ch in text:
        if ch in ft:
            ft[ch] += 1
    return list(ft.items())

def parse_length(raw: str, limit: int) -> int:
    digits = raw.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid length {raw!r}, expected a whole number")
    n = int(digits)
    if n <= 0:
        raise ValueError("output length must be a positive number")
    if n > limit:
        raise ValueError(f"output length too big, should be <= {limit}")
    return n

def prompt_length(limit: int, input_fn: Optional[Callable[[str], str]] = None) -> int:
    input_fn = input_fn or input
    while True:
        try:
            raw = input_fn("Enter output length: ")
        except EOFError:
            raise SystemExit("No output length given") from None
        try:
            return parse_length(raw, limit)
        except ValueError as exc:
            logger.warning("%s", exc)


# Heap display

def log_heap(merged: huff.WeightedElement, heap: MinHeap) -> None:
    logger.info("merged %r -> %s", merged, ", ".join(repr(e) for e in heap.items()))


# Report output

@dataclass
class TotalsRow:
    index: int
    char: str
    code: str
    huffman_bits: int
    fixed_bits: int


def totals_rows(text: str, code_map: Dict[str, str]) -> List[TotalsRow]:
    return [
        TotalsRow(index=i, char=ch, code=code, huffman_bits=h, fixed_bits=f)
        for i, (ch, code, h, f) in enumerate(huff.running_bit_totals(text, code_map, FIXED_WIDTH), start=1)
    ]

def format_report(code_map: Dict[str, str], rows: Sequence[TotalsRow], alphabet: str = ALPHABET) -> str:
    lines = [f"'{ch}' : {code_map[ch]}" for ch in alphabet]
    lines += [f"{r.code}\t\t{r.huffman_bits}\t\t{r.fixed_bits}" for r in rows]
    return "\n".join(lines) + "\n"

def write_report(path: Path, report: str) -> None:
    path.write_text(report, encoding="utf-8")

def write_csv(path: Path, rows: List[TotalsRow]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=[field.name for field in fields(TotalsRow)])
        writer.writeheader()
        writer.writerows(asdict(r) for r in rows)

def plot_totals(rows: List[TotalsRow], out_path: Path) -> None:
    if not rows:
        return

    x = [r.index for r in rows]

    plt.figure()
    plt.plot(x, [r.huffman_bits for r in rows], label="huffman")
    plt.plot(x, [r.fixed_bits for r in rows], label=f"{FIXED_WIDTH}-bit ascii")
    plt.xlabel("Characters Encoded")
    plt.ylabel("Total Bits")
    plt.title("Huffman vs Fixed-Width Running Total")
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


# Main

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman codebook and bit savings for ' ' + a-z.")
    ap.add_argument("input", type=str, help="Text file to count symbol frequencies in")
    ap.add_argument("--length", type=str, default=None,
                    help="Number of input characters to encode (prompted for when omitted)")
    ap.add_argument("--output", type=str, default="out.txt", help="Report file")
    ap.add_argument("--csv", type=str, default=None, help="Also write running totals as CSV")
    ap.add_argument("--plot", type=str, default=None, help="Also plot running totals to this PNG")
    ap.add_argument("--fold-case", action="store_true", help="Lowercase the input before counting")
    ap.add_argument("--show-heap", action="store_true", help="Log heap contents after every merge")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    return ap

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(levelname)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    path = Path(args.input)
    if not path.is_file():
        raise SystemExit(f"Error opening input file: {path}")

    text = filter_alphabet(read_text(path, fold_case=args.fold_case))
    if not text:
        raise SystemExit(f"No characters from {ALPHABET!r} in {path}")
    logger.debug("kept %d alphabet characters from %s", len(text), path)

    if args.length is None:
        length = prompt_length(len(text))
    else:
        try:
            length = parse_length(args.length, len(text))
        except ValueError as exc:
            raise SystemExit(str(exc)) from None

    ft = freq_table(text)
    heap = MinHeap(huff.leaves_from_frequencies(ft))
    if args.show_heap:
        logger.info("min heap: %s", ", ".join(repr(e) for e in heap.items()))

    root = huff.build_huffman_tree(heap, on_merge=log_heap if args.show_heap else None)
    logger.info("prefix-free tree root: %r", root)
    code_map = huff.generate_huffman_codes(root)

    rows = totals_rows(text[:length], code_map)
    out_path = Path(args.output)
    write_report(out_path, format_report(code_map, rows))

    if args.csv:
        write_csv(Path(args.csv), rows)
    if args.plot:
        plot_totals(rows, Path(args.plot))

    last = rows[-1]
    saved = last.fixed_bits - last.huffman_bits
    print(f"Encoded {length} characters: {last.huffman_bits} bits Huffman vs {last.fixed_bits} bits ASCII")
    print(f"Saved {saved} bits ({saved / last.fixed_bits:.1%})")
    print(f"Weighted code length over the whole file: {huff.weighted_code_length(code_map, ft)} bits")
    print(f"Report written to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
