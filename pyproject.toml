[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "productapi"
version = "0.1.0"
description = "A small JSON HTTP API for user registration, token login and per-user product records"
requires-python = ">=3.10"
keywords = ["http", "api", "flask", "jwt", "bcrypt", "sqlalchemy", "products", "rest"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "sqlalchemy",
    "pyjwt",
    "bcrypt",
    "python-dotenv",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
productapi = "productapi.app:main"

[tool.hatch.build.targets.wheel]
packages = ["productapi"]

[tool.pytest.ini_options]
addopts = "-ra"
