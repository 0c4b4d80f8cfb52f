from setuptools import setup, find_packages

setup(
    name="otel_aws_messaging",
    version="0.1.0",
    description="OpenTelemetry trace context propagation across AWS SNS and SQS",
    author="otel_aws_messaging Team",
    packages=find_packages(include=["otel_aws_messaging", "otel_aws_messaging.*"]),
    install_requires=[
        "boto3>=1.26.0",
        "botocore>=1.29.0",
        "opentelemetry-api>=1.20.0,<1.42",
        "opentelemetry-sdk>=1.20.0,<1.42",
        "opentelemetry-exporter-otlp>=1.20.0,<1.42",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    entry_points={
        "console_scripts": [
            "otel-sqs-consumer=otel_aws_messaging.apps.consumer:main",
            "otel-sns-publisher=otel_aws_messaging.apps.publisher:main",
            "otel-sns-sqs-demo=otel_aws_messaging.apps.demo:main",
        ],
    },
    python_requires=">=3.9",
)
