
__version__ = "0.1.0"
__banner__ = \
"""
# fastshareqr %s 
# Share text, files and directories by scanning a QR code
""" % __version__
