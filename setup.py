from setuptools import setup, find_packages

setup(
    name="nekobox-questions",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        "sqlalchemy[asyncio]>=2.0.0",
        "aiosqlite>=0.19.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "postgres": ["asyncpg>=0.27.0"],
        "mysql": ["aiomysql>=0.2.0"],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "nekobox-init-db=nekobox.scripts.init_db:main",
        ],
    },
    python_requires=">=3.8",
)
