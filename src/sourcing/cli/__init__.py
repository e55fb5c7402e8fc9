"""
Command Line Interface Package

Command Structure:
- sourcing: Main entry point with utility commands (version, config)
- sourcing reconcile: Classify order lines against a verification export
- sourcing delivery: Join delivery registry records and parse exports
"""
