# setup.py
from setuptools import setup, find_packages

setup(
    name="expense-ledger",
    version="0.1.0",
    description="A command-line personal expense ledger backed by a JSON file",
    author="Your Name",
    author_email="you@example.com",
    url="https://github.com/yourusername/expense-ledger",
    packages=find_packages(include=["expense_tracker", "expense_tracker.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
        "xlsxwriter>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "expenses=expense_tracker.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
