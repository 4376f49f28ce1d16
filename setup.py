from setuptools import setup, find_packages

setup(
    name="ecoindex-audit",
    version="1.0.0",
    description="EcoIndex audit of web pages with Lighthouse, with HTML/CSV/JSON/Sonar reports",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "ecoindex_audit": [
            "templates/*.html",
            "templates/*.css",
            "translations/*.json",
        ],
    },
    install_requires=[
        "pyyaml>=6.0",
        "requests>=2.31.0",
        "jsonschema>=4.20.0",
        "jinja2>=3.1.2",
        "click>=8.1.7",
        "tqdm>=4.66.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "beautifulsoup4>=4.12.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecoindex-audit=ecoindex_audit.cli:main",
        ],
    },
    python_requires=">=3.8",
)
