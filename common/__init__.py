"""
Helpers shared by the installer stages: command execution, logging,
host probes, file handling and retry.
"""
