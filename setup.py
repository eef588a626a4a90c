# setup.py
from setuptools import setup, find_packages

setup(
    name="asset_scout",
    version="0.1.0",
    description="Асинхронный поиск PDF-документов на сайте AssetScout",
    packages=find_packages(include=["asset_scout", "asset_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.2",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        # тесты поднимают локальный aiohttp-сервер
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "asset_scout=asset_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
