from setuptools import setup, find_packages

setup(
    name="lingotube",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "youtube-transcript-api>=1.0.0",
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "langchain-anthropic>=0.2.0",
        "langchain-google-genai>=2.0.0",
        "aiohttp>=3.9.0",
        "python-dotenv>=1.0.0",
        "colorlog>=6.7.0",
        "fastapi>=0.110.0",
        "pydantic>=2.0",
        "uvicorn>=0.27.0",
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
            "lingotube-api=lingotube_api.app:main",
        ],
    },
    python_requires=">=3.10",
    description="Bilingual, time-aligned transcripts for YouTube videos",
    author="Venkatesh Murugadas",
    url="https://github.com/VenkateshDas/youtube_analysis",
)
