# setup.py
from setuptools import setup, find_packages

setup(
    name="sigmo",
    version="0.1.0",
    description="Sigmo: a small Lisp-family scripting language",
    packages=find_packages(include=["sigmo", "sigmo.*", "sigmo_lsp", "sigmo_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "sigmo=sigmo.__main__:main",
            "sigmo-ls=sigmo_lsp.server:main",
        ],
    },
    zip_safe=False,
)
