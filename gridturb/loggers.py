"""
This module sets up the logging utilities to be used throughout
"""

import logging as log

gridturb_log = log.getLogger("gridturb")

gridturb_log.setLevel(log.INFO)


def format_banner(msg: str, loc: str = "") -> str:
    """
    Format routine with = vertical delimiting. Specifically, returns a
    string of the form

    ```
    =================================
    [{loc}] -> {msg}
    =================================
    ```

    where the substring `[{loc}] -> ` is added only if loc is not empty.

    Parameters
    ----------
    msg
        The intended message
    loc
        A string to be placed between square brackets preceding the
        arrow. Intended to be used as some indication of where the
        call to this function is located. By default, the empty string.
    """

    header = ""
    if loc != "":
        header = f"[{loc}] -> "

    return f"\n=================================\n{header}{msg}\n=================================\n"
