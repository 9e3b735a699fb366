"""Modules that don't need bundling because the LLRT binary embeds them.

See https://github.com/awslabs/llrt?tab=readme-ov-file#using-aws-sdk-v3-with-llrt
"""

from ..models import LlrtBinaryType

SDK_PREFIXES = ("@aws-sdk", "@aws-crypto", "@smithy")

STANDARD_SDK_PACKAGES = (
    "@aws-sdk/client-cloudwatch-events",
    "@aws-sdk/client-cloudwatch-logs",
    "@aws-sdk/client-cognito-identity",
    "@aws-sdk/client-cognito-identity-provider",
    "@aws-sdk/client-dynamodb",
    "@aws-sdk/client-eventbridge",
    "@aws-sdk/client-kms",
    "@aws-sdk/client-lambda",
    "@aws-sdk/client-s3",
    "@aws-sdk/client-secrets-manager",
    "@aws-sdk/client-ses",
    "@aws-sdk/client-sfn",
    "@aws-sdk/client-sns",
    "@aws-sdk/client-sqs",
    "@aws-sdk/client-ssm",
    "@aws-sdk/client-sts",
    "@aws-sdk/client-xray",
    "@aws-sdk/credential-providers",
    "@aws-sdk/lib-dynamodb",
    "@aws-sdk/lib-storage",
    "@aws-sdk/s3-presigned-post",
    "@aws-sdk/s3-request-presigner",
    "@aws-sdk/util-dynamodb",
    "@aws-sdk/util-user-agent-browser",
)

EXTERNAL_MODULES: dict[LlrtBinaryType, tuple[str, ...]] = {
    LlrtBinaryType.FULL_SDK: SDK_PREFIXES,
    LlrtBinaryType.STANDARD: STANDARD_SDK_PACKAGES + SDK_PREFIXES,
    LlrtBinaryType.NO_SDK: (),
}


def external_modules_for(binary_type: LlrtBinaryType) -> list[str]:
    """Return a fresh list of the modules embedded in ``binary_type``."""
    return list(EXTERNAL_MODULES[binary_type])
