#!/usr/bin/env python3
"""
Clone a Lambda function with its code, layers, environment variables,
VPC attachment and IAM role.

Usage: clone-lambda <SOURCE_FUNCTION_NAME> <NEW_FUNCTION_NAME> [AWS_REGION]
Example: clone-lambda my-function my-function-manual us-east-1
"""
import argparse
import logging
import sys

import boto3

from lambda_cloner import config
from lambda_cloner.cloner import LambdaCloner, describe_summary, make_work_dir
from lambda_cloner.errors import CloneError

USAGE = "Usage: clone-lambda <SOURCE_FUNCTION_NAME> <NEW_FUNCTION_NAME> [AWS_REGION]"
EXAMPLE = "Example: clone-lambda my-function my-function-manual us-east-1"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="clone-lambda",
        description="Clone a Lambda function's code and configuration to a new or existing function.",
    )
    parser.add_argument("source", nargs="?", help="name of the function to copy")
    parser.add_argument("target", nargs="?", help="name of the function to create or update")
    parser.add_argument("region", nargs="?", help="AWS region (default: $AWS_REGION or us-east-1)")
    parser.add_argument("--profile", help="boto3 profile name")
    parser.add_argument("-y", "--yes", action="store_true", help="update an existing target without asking")
    parser.add_argument("--work-dir", help="where to create the lambda-clone-* directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def ask_update(target):
    try:
        reply = input(f"Do you want to UPDATE '{target}'? (y/n): ").strip()
    except EOFError:
        # closed stdin counts as "no"
        print()
        return False
    return reply[:1] in ("y", "Y")


def print_summary(result, region):
    target = result["target"]
    settings = result["settings"]

    print("\n🎉 === Clone Complete ===\n")
    print(f"Source Function: {result['source']}")
    print(f"New Function: {target}")
    print(f"New Function ARN: {result['function_arn']}")
    print("\nConfiguration Summary:")
    for line in describe_summary(settings):
        print(line)
    print(f"\nAll files saved in: {result['work_dir']}\n")
    print("Next Steps:")
    print(f"1. Point any API Gateway integrations at: {result['function_arn']}")
    print(f"2. Test the function: aws lambda invoke --function-name {target} output.json --region {region}")
    print("\nTo delete the function later:")
    print(f"  aws lambda delete-function --function-name {target} --region {region}\n")


def main(argv=None, session_factory=boto3.Session, http=None, confirm=None):
    args = build_parser().parse_args(argv)

    if not args.source or not args.target:
        print("❌ Error: Missing required arguments")
        print(USAGE)
        print(EXAMPLE)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    region = args.region or config.region()
    session = session_factory(profile_name=args.profile, region_name=region)
    lambda_client = session.client("lambda", region_name=region)

    work_dir = make_work_dir(args.work_dir)

    print("=== Lambda Function Cloner ===")
    print(f"Source Function: {args.source}")
    print(f"New Function: {args.target}")
    print(f"Region: {region}")
    print(f"Working Directory: {work_dir}\n")

    if confirm is None:
        confirm = (lambda target: True) if args.yes else ask_update

    cloner = LambdaCloner(lambda_client, work_dir, http=http)
    try:
        result = cloner.clone(args.source, args.target, confirm)
    except CloneError as e:
        print(f"❌ Error: {e}")
        return 1

    if result is None:
        return 0

    print_summary(result, region)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
