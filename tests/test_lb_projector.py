import pytest

from collectors.aws.lb_projector import (
    build_record,
    flatten_subnet_mappings,
    flatten_subnets,
    project_load_balancer,
)
from core.errors import ApiCallError, AttributeParseError, FieldAssignmentError
from core.models import AccessLogConfig, SubnetMapping
from core.tags import IgnoreTagsConfig, TagSet
from conftest import attributes_response, make_lb, tags_response

NLB_ZONES = [
    {'ZoneName': 'us-east-1a', 'SubnetId': 'subnet-aaa', 'OutpostId': 'op-1',
     'LoadBalancerAddresses': [{'IpAddress': '3.3.3.3', 'AllocationId': 'eipalloc-1',
                                'PrivateIPv4Address': '10.0.1.10', 'IPv6Address': '2600::1'}]},
    {'ZoneName': 'us-east-1b', 'SubnetId': 'subnet-bbb'},
]


def test_project_full_record(elbv2_client, stubber):
    lb = make_lb('web', scheme='internal', CustomerOwnedIpv4Pool='ipv4pool-coip-1')
    arn = lb['LoadBalancerArn']
    stubber.add_response('describe_tags', tags_response(arn, {'env': 'prod', 'aws:ec2:fleet': 'f'}),
                         {'ResourceArns': [arn]})
    stubber.add_response('describe_load_balancer_attributes', attributes_response({
        'access_logs.s3.enabled': 'true',
        'access_logs.s3.bucket': 'lb-logs',
        'access_logs.s3.prefix': 'web',
        'idle_timeout.timeout_seconds': '60',
        'deletion_protection.enabled': 'true',
        'routing.http2.enabled': 'true',
        'routing.http.drop_invalid_header_fields.enabled': 'false',
    }), {'LoadBalancerArn': arn})

    record = project_load_balancer(elbv2_client, lb, IgnoreTagsConfig())

    assert record.id == record.arn == arn
    assert record.arn_suffix == 'app/web/50dc6c495c0c9188'
    assert record.internal is True
    assert record.load_balancer_type == 'application'
    assert record.security_groups == {'sg-111', 'sg-222'}
    assert record.subnets == {'subnet-aaa', 'subnet-bbb'}
    assert record.zone_id == 'Z35SXDOTRQ7X7K'
    assert record.customer_owned_ipv4_pool == 'ipv4pool-coip-1'
    assert record.tags == {'env': 'prod'}
    assert record.access_logs == [AccessLogConfig(enabled=True, bucket='lb-logs', prefix='web')]
    assert record.idle_timeout == 60
    assert record.enable_deletion_protection is True
    assert record.enable_http2 is True
    assert record.drop_invalid_header_fields is False
    assert record.enable_cross_zone_load_balancing is False


def test_internet_facing_is_not_internal():
    record = build_record(make_lb('web', scheme='internet-facing'), TagSet(), [])
    assert record.internal is False
    assert record.access_logs == [AccessLogConfig()]


def test_subnet_mapping_one_entry_per_zone():
    mappings = flatten_subnet_mappings(NLB_ZONES)
    assert sorted(mappings, key=lambda m: m.subnet_id) == [
        SubnetMapping(subnet_id='subnet-aaa', outpost_id='op-1', allocation_id='eipalloc-1',
                      private_ipv4_address='10.0.1.10', ipv6_address='2600::1'),
        SubnetMapping(subnet_id='subnet-bbb'),
    ]
    assert mappings[1].allocation_id == '' and mappings[1].ipv6_address == ''


def test_flatten_does_not_mutate_input():
    zones = [dict(z) for z in NLB_ZONES]
    flatten_subnets(zones)
    flatten_subnet_mappings(zones)
    assert zones == NLB_ZONES


def test_projection_is_idempotent():
    lb = make_lb('edge', kind='net', AvailabilityZones=NLB_ZONES)
    attrs = attributes_response({'idle_timeout.timeout_seconds': '350',
                                 'load_balancing.cross_zone.enabled': 'true'})['Attributes']
    first = build_record(lb, TagSet({'env': 'prod'}), attrs)
    second = build_record(lb, TagSet({'env': 'prod'}), attrs)
    assert first.model_dump_json() == second.model_dump_json()
    assert first.enable_cross_zone_load_balancing is True


def test_bad_idle_timeout_aborts(elbv2_client, stubber):
    lb = make_lb('web')
    arn = lb['LoadBalancerArn']
    stubber.add_response('describe_tags', tags_response(arn, {}))
    stubber.add_response('describe_load_balancer_attributes',
                         attributes_response({'idle_timeout.timeout_seconds': 'abc'}))
    with pytest.raises(AttributeParseError):
        project_load_balancer(elbv2_client, lb)


def test_final_tag_fetch_not_found_is_fatal(elbv2_client, stubber):
    lb = make_lb('web')
    stubber.add_client_error('describe_tags', service_error_code='LoadBalancerNotFound', http_status_code=400)
    with pytest.raises(ApiCallError, match='listing tags for'):
        project_load_balancer(elbv2_client, lb)


def test_attribute_fetch_error_wrapped(elbv2_client, stubber):
    lb = make_lb('web')
    stubber.add_response('describe_tags', tags_response(lb['LoadBalancerArn'], {}))
    stubber.add_client_error('describe_load_balancer_attributes', service_error_code='Throttling',
                             http_status_code=400)
    with pytest.raises(ApiCallError, match='retrieving LB Attributes'):
        project_load_balancer(elbv2_client, lb)


def test_field_assignment_error_names_field():
    lb = make_lb('web', SecurityGroups=[{'not': 'a string'}])
    with pytest.raises(FieldAssignmentError, match='security_groups'):
        build_record(lb, TagSet(), [])
