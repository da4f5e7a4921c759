# setup.py
from setuptools import setup, find_packages

setup(
    name="a11y_scout",
    version="0.1.0",
    description="Аудит доступности всех страниц sitemap с HTML-отчётом по сайту",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"a11y_scout": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "markupsafe>=2.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "beautifulsoup4>=4.12",
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["a11y-scout=a11y_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
