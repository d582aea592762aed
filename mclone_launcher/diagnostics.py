import sys
from typing import Optional, Sequence, TextIO


def dump(root: str, argv: Sequence[str], env: Sequence[str], stream: Optional[TextIO] = None) -> None:
    """Print the resolved root, child command line and child environment.

    Echoes the whole environment, so it is only ever called when diagnostics
    are switched on in the config.
    """
    out = stream or sys.stdout
    print("*** root", file=out)
    print(root, file=out)
    print("*** command line", file=out)
    print(" ".join(argv), file=out)
    print("*** environment", file=out)
    for entry in env:
        print(entry, file=out)
    print(file=out)
    out.flush()
