from setuptools import setup, find_packages

setup(
    name="transrpc",
    version="0.1.0",
    description="Session-aware client for the Transmission JSON-over-HTTP RPC protocol",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.27",
        "python-dotenv>=1.0.0",
        "typer>=0.12",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "transrpc=transrpc.ui.cli:run",
        ],
    },
    python_requires=">=3.10",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
