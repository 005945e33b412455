"""
Configuration, CLI and external-tool layer of the TAK server setup installer.
"""
