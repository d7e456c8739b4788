"""Offline evaluator for the season classifier.

Runs the analysis pipeline in process over a folder of images with known
seasons and prints accuracy and a confusion matrix.

Usage:
    python -m skintone.evaluate ./eval/images ./eval/labels.json

labels.json maps file names to seasons:
    {"img1.jpg": "autumn", "img2.jpg": "winter"}
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from .core.errors import AnalysisError
from .core.pipeline import analyze
from .models.types import Season

logger = logging.getLogger(__name__)

SEASONS = [season.value for season in Season]

ConfusionMatrix = Dict[str, Dict[str, int]]


def init_matrix() -> ConfusionMatrix:
    return {truth: {predicted: 0 for predicted in SEASONS} for truth in SEASONS}


def evaluate(image_dir: str, labels: Dict[str, str]) -> Dict:
    """Analyze every labelled image and tally predictions.

    Files with an unknown season label or missing on disk are skipped;
    analysis failures are recorded in ``errors``.

    Returns:
        Dictionary with ``total``, ``correct``, ``matrix`` and ``errors``.
    """
    matrix = init_matrix()
    errors: List[str] = []
    total = 0
    correct = 0

    for filename, truth in labels.items():
        if truth not in SEASONS:
            logger.warning(f"Skipping {filename}: invalid season {truth!r}")
            continue

        path = os.path.join(image_dir, filename)
        if not os.path.exists(path):
            logger.warning(f"Missing file: {path}")
            errors.append(f"Missing: {filename}")
            continue

        with open(path, 'rb') as f:
            image_bytes = f.read()

        try:
            result = analyze(image_bytes=image_bytes)
        except AnalysisError as e:
            logger.warning(f"Analysis failed for {filename}: {e.code} {str(e)}")
            errors.append(f"{filename}: {e.code}")
            continue

        predicted = result.season.season.value
        matrix[truth][predicted] += 1
        total += 1
        if predicted == truth:
            correct += 1

    return {'total': total, 'correct': correct, 'matrix': matrix, 'errors': errors}


def format_report(report: Dict) -> str:
    total = report['total']
    accuracy = report['correct'] / total if total else 0.0
    width = max(len(s) for s in SEASONS) + 2

    lines = [
        f"Evaluated: {total}",
        f"Accuracy: {accuracy * 100:.1f}% ({report['correct']}/{total})",
        "",
        "Confusion matrix (rows = truth, columns = predicted):",
        "".ljust(width) + "".join(s.ljust(width) for s in SEASONS),
    ]
    for truth in SEASONS:
        row = report['matrix'][truth]
        lines.append(truth.ljust(width) + "".join(str(row[p]).ljust(width) for p in SEASONS))

    if report['errors']:
        lines.append("")
        lines.append(f"Errors ({len(report['errors'])}):")
        lines.extend(f"  {error}" for error in report['errors'])
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate season classification against labelled images")
    parser.add_argument('image_dir', help="Directory containing the images")
    parser.add_argument('labels', help="JSON file mapping image file names to seasons")
    args = parser.parse_args(argv)

    if not os.path.isdir(args.image_dir):
        print(f"Image directory not found: {args.image_dir}", file=sys.stderr)
        return 1
    if not os.path.isfile(args.labels):
        print(f"Labels file not found: {args.labels}", file=sys.stderr)
        return 1

    with open(args.labels, 'r', encoding='utf-8') as f:
        labels = json.load(f)

    report = evaluate(args.image_dir, labels)
    print(format_report(report))
    return 0 if report['total'] else 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
