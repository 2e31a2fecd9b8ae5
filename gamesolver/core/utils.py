import logging


def setup_logging(level="INFO"):
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_info(score, outcome, nodes, elapsed, iterations=None, table_size=None):
        nps = int(nodes / elapsed) if elapsed > 0 else 0
        parts = [f"info score {score}", f"outcome {outcome!r}", f"nodes {nodes}", f"nps {nps}",
                 f"time {int(elapsed * 1000)}"]
        if iterations is not None:
            parts.append(f"iterations {iterations}")
        if table_size is not None:
            parts.append(f"hashfull {table_size}")
        return " ".join(parts)
