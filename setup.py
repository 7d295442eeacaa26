"""
Setup script for the llm-poker-bot package.

Installs the ``poker_bot`` package from ``src/`` and the
``poker-bot`` console script.
"""

from setuptools import setup, find_packages

setup(
    name="llm-poker-bot",
    version="1.0.0",
    description="LLM Poker Bot - play a poker table with a chat-completion model",
    author="Poker Bot Maintainers",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "websockets>=12.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
        "dev": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "poker-bot=poker_bot.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
