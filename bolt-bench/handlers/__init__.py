"""
Handler implementations invoked by the Lambda entry points and the CLI.
"""
