# =========== START of __init__.py ===========
__version__ = "0.1.0"
# =========== END of __init__.py ===========
