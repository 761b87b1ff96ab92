"""
Utility helpers shared by the engine and the command line host.
"""
