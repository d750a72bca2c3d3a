from setuptools import setup, find_packages

setup(
    name="youtube_transcripts",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "requests>=2.31.0",
        "colorlog>=6.7.0",
        "python-dotenv>=1.0.0",
        "fastapi>=0.110.0",
        "pydantic>=2.0",
        "uvicorn>=0.27.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.25.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "youtube-transcripts=youtube_transcripts.main:main",
            "youtube-transcripts-api=youtube_transcripts_api.app:run",
        ],
    },
    python_requires=">=3.9",
    description="YouTube transcript extraction and formatting for people and language models",
    author="Venkatesh Murugadas",
)
