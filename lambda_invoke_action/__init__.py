"""lambda_invoke_action — Invoke an AWS Lambda function from a CI pipeline step.

Provides:
    - Step input reading (GitHub Actions ``INPUT_*`` variables)
    - Direct or STS assume-role credential resolution
    - Lambda invocation with configurable timeout/retries
    - Output recording and run failure signalling
"""

__version__ = "1.0.0"
