from setuptools import setup, find_packages

setup(
    name="campus-signage",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "campus_signage": [
            "sql/events/*.sql",
            "templates/*.html",
            "static/css/*.css",
        ],
    },
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.6.0",
        "python-dotenv>=1.0.0",
        "jinja2>=3.1.2",
        "requests",
        "flask>=2.2.0",
        "flask-cors>=4.0.0",
        "pyyaml>=6.0",
        "marshmallow>=3.19.0",  # Request validation
        "PyJWT>=2.6.0",  # Session tokens
        "psycopg[binary]>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "campus-signage=campus_signage.cli:main",
        ],
    },
)
