from setuptools import setup, find_packages

setup(
    name="imdbwagon",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click",
        "psycopg2-binary",
        "python-dotenv",
        "pandas<3",
        "sqlalchemy>=2.0",
        "pydantic>=2",
        "requests",
        "rich",
        "toml",
    ],
    extras_require={
        "mysql": ["pymysql"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "imdbwagon = imdbwagon.main:start_cli",
        ],
    },
    author="Joel M",
    author_email="jtmcn.dev@gmail.com",
    description="A command-line tool for downloading the IMDb plain text dumps and loading them into a SQL database.",
    license="MIT",
    keywords="imdb etl database postgresql mysql sqlite",
)
