"""Core logic for the JSON directory to CSV flattener.

The Gradio UI lives in `app.py` and the command line entry point in `cli.py`.
This package contains the functions that:
- stringify JSON values for CSV cells
- flatten one parsed document into a row
- derive the column set across rows
- collect, read and write files
"""
