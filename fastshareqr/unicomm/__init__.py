import logging

logger = logging.getLogger('fastshareqr.unicomm')
