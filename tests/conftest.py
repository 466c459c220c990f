"""
Pytest configuration and shared fixtures for lb lookup tests
"""
import os
import sys
import tempfile
from pathlib import Path

import boto3
import pytest
from botocore.stub import Stubber

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment before importing collectors
os.environ['PROGRESS'] = '0'
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='lb-lookup-log-'))

ACCOUNT = '123456789012'
REGION = 'us-east-1'


def lb_arn(name, kind='app', lb_id='50dc6c495c0c9188'):
    return f'arn:aws:elasticloadbalancing:{REGION}:{ACCOUNT}:loadbalancer/{kind}/{name}/{lb_id}'


def make_lb(name='web', kind='app', scheme='internet-facing', **overrides):
    """A describe_load_balancers entry shaped like the real API response"""
    lb = {
        'LoadBalancerArn': lb_arn(name, kind),
        'LoadBalancerName': name,
        'DNSName': f'{name}-1234567890.{REGION}.elb.amazonaws.com',
        'CanonicalHostedZoneId': 'Z35SXDOTRQ7X7K',
        'Scheme': scheme,
        'VpcId': 'vpc-0a1b2c3d',
        'State': {'Code': 'active'},
        'Type': 'application' if kind == 'app' else 'network',
        'AvailabilityZones': [
            {'ZoneName': 'us-east-1a', 'SubnetId': 'subnet-aaa'},
            {'ZoneName': 'us-east-1b', 'SubnetId': 'subnet-bbb'},
        ],
        'SecurityGroups': ['sg-111', 'sg-222'],
        'IpAddressType': 'ipv4',
    }
    lb.update(overrides)
    return lb


def tags_response(arn, tags):
    # DescribeTagsOutput.Tags needs at least one entry; untagged resources omit it
    desc = {'ResourceArn': arn}
    if tags:
        desc['Tags'] = [{'Key': k, 'Value': v} for k, v in tags.items()]
    return {'TagDescriptions': [desc]}


def attributes_response(attrs):
    return {'Attributes': [{'Key': k, 'Value': v} for k, v in attrs.items()]}


@pytest.fixture
def elbv2_client():
    return boto3.client(
        'elbv2',
        region_name=REGION,
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def stubber(elbv2_client):
    with Stubber(elbv2_client) as stub:
        yield stub
        stub.assert_no_pending_responses()
