"""
Airwatch shared infrastructure: configuration, logging and console output.
"""
