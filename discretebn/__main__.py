"""
Query a Bayesian network stored in a file.

    python -m discretebn network.json fight brave=True enemy_amount=Many
    python -m discretebn network.xdsl run_away fight=False --sample --seed 7
"""
import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from discretebn.errors import BayesNetError
from discretebn.inference import VariableElimination
from discretebn.logging_config import configure_logging
from discretebn.parsers import BayesianGenieParser, BayesianJsonParser
from discretebn.util import display_distribution

logger = logging.getLogger("discretebn")

PARSERS = {
    "json": BayesianJsonParser,
    "genie": BayesianGenieParser,
}


def guess_format(path: Path) -> str:
    """Pick a parser from the file extension, GeNIe files are XML"""
    return "genie" if path.suffix.lower() in (".xdsl", ".xml") else "json"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Exact inference on a discrete Bayesian network")
    parser.add_argument("network", type=str, help="Path to the network file")
    parser.add_argument("query", type=str, help="Name of the node to infer")
    parser.add_argument("evidence", nargs="*", help="Observations in the form name=value")
    parser.add_argument("--format", choices=sorted(PARSERS), default=None,
                        help="Network file format (default: guessed from the extension)")
    parser.add_argument("--sample", action="store_true", help="Also draw one value from the posterior")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --sample")
    parser.add_argument("--tablefmt", type=str, default="simple", help="tabulate table format")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: DISCRETEBN_LOG_LEVEL)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    path = Path(args.network)
    fmt = args.format or guess_format(path)
    try:
        network = PARSERS[fmt]().parse_file(path)
        ve = VariableElimination(network)
        distribution = ve.infer(args.query, args.evidence)
        print(display_distribution(network.find_node(args.query), distribution, tablefmt=args.tablefmt))
        if args.sample:
            drawn = ve.pick_one(distribution, np.random.default_rng(args.seed))
            print(f"sample: {network.find_node(args.query).instantiate(drawn)}")
    except (BayesNetError, OSError) as e:
        logger.debug("Query failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
