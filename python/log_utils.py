"""
Console reporting shared by the plotting scripts.
"""

verbose = False


def set_verbose(enabled: bool):
    global verbose
    verbose = enabled


def warn(s: str):
    print(f"[WARNING]: {s}")


def info(s: str):
    if verbose:
        print(s)
