"""
Installer stages.

Each stage module registers one class with ``StageRegistry``; the
``StageOrchestrator`` imports every module in this package and runs the
registered stages in dependency order.
"""
