[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "captchaclient"
version = "0.0.3"
description = "Asynchronous client for the 2Captcha captcha solving service."
requires-python = ">=3.10"
dependencies = [
    "httpx",
]
keywords = ["captcha", "2captcha", "recaptcha", "hcaptcha", "turnstile", "async"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["captchaclient"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
