"""
jsonscrub_cli
~~~~~~~~~~~~~
Command-line front end for :mod:`jsonscrub_core`.
"""
