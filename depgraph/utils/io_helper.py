import sys

def emit_success(message: str):
    """
    Finalizes execution by printing a single confirmation line to stdout.
    Exits with code 0.
    """
    sys.stdout.write(message + "\n")
    sys.stdout.flush()
    sys.exit(0)

def emit_error(message: str):
    """
    Finalizes execution with an error state.
    Exits with code 1.
    """
    # stderr only; stdout stays empty on failure
    sys.stderr.write(message + "\n")
    sys.exit(1)
