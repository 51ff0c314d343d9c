from setuptools import setup

setup(
    name="pytextsearch",
    version="0.1.0",
    packages=["pytextsearch", "pytextsearch.commands"],
    python_requires=">=3.9",
    install_requires=["nltk>=3.8"],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={
        "console_scripts": ["pytextsearch=pytextsearch.commands.main:main"],
    },
)
