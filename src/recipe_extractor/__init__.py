"""Recipe Extractor Service.

Turns unstructured recipe text into validated, hierarchically structured
recipe documents with the help of a text-completion model.
"""

__version__ = "0.1.0"
