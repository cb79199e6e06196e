from setuptools import setup, find_packages

setup(
    name="suggestpad",
    version="0.1.0",
    description="Plain text editor with inline real-time word-completion suggestions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyQt5>=5.12",
        "pyspellchecker>=0.7",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "gui_scripts": [
            "suggestpad=suggestpad.main:main",
        ],
    },
)
