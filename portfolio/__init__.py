"""Personal portfolio website with a contact form that forwards messages by email."""


def _get_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("portfolio-site")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
