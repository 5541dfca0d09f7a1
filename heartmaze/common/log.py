import logging

_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def setup_logging(level: str = 'INFO') -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt='%H:%M:%S')
    root.setLevel(level)
