"""
Shared fixtures for the LTI SDK test suite
"""

from unittest.mock import Mock

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from lti_sdk.signing import SigningProtocol


IMS_TOOL_URL = "http://www.imsglobal.org/developers/LTI/test/v1p1/tool.php"

IMS_BASE_STRING = (
    "POST&http%3A%2F%2Fwww.imsglobal.org%2Fdevelopers%2FLTI%2Ftest%2Fv1p1%2Ftool.php&"
    "context_id%3D456434513%26context_label%3DSI182%26context_title%3DDesign%2520of%2520Personal%2520Environments"
    "%26launch_presentation_css_url%3Dhttp%253A%252F%252Fwww.imsglobal.org%252Fdevelopers%252FLTI%252Ftest%252Fv1p1%252Flms.css"
    "%26launch_presentation_document_target%3Dframe%26launch_presentation_locale%3Den-US"
    "%26launch_presentation_return_url%3Dhttp%253A%252F%252Fwww.imsglobal.org%252Fdevelopers%252FLTI%252Ftest%252Fv1p1%252Flms_return.php"
    "%26lis_outcome_service_url%3Dhttp%253A%252F%252Fwww.imsglobal.org%252Fdevelopers%252FLTI%252Ftest%252Fv1p1%252Fcommon%252Ftool_consumer_outcome.php%253Fb64%253DMTIzNDU6OjpzZWNyZXQ%253D"
    "%26lis_person_contact_email_primary%3Duser%2540school.edu%26lis_person_name_family%3DPublic"
    "%26lis_person_name_full%3DJane%2520Q.%2520Public%26lis_person_name_given%3DGiven"
    "%26lis_person_sourcedid%3Dschool.edu%253Auser%26lis_result_sourcedid%3Dfeb-123-456-2929%253A%253A28883"
    "%26lti_message_type%3Dbasic-lti-launch-request%26lti_version%3DLTI-1p0%26oauth_callback%3Dabout%253Ablank"
    "%26oauth_consumer_key%3D12345%26oauth_nonce%3D93ac608e18a7d41dec8f7219e1bf6a17"
    "%26oauth_signature_method%3DHMAC-SHA1%26oauth_timestamp%3D1348093590%26oauth_version%3D1.0"
    "%26resource_link_description%3DA%2520weekly%2520blog.%26resource_link_id%3D120988f929-274612"
    "%26resource_link_title%3DWeekly%2520Blog%26roles%3DInstructor%26tool_consumer_info_product_family_code%3Dims"
    "%26tool_consumer_info_version%3D1.1%26tool_consumer_instance_description%3DUniversity%2520of%2520School%2520%2528LMSng%2529"
    "%26tool_consumer_instance_guid%3Dlmsng.school.edu%26user_id%3D292832126"
)

IMS_SIGNATURE = "QWgJfKpJNDrpncgO9oXxJb8vHiE="


@pytest.fixture
def ims_launch_form():
    """Launch parameters of the IMS LTI 1.1 test consumer"""
    return {
        "context_id": "456434513",
        "context_label": "SI182",
        "context_title": "Design of Personal Environments",
        "launch_presentation_css_url": "http://www.imsglobal.org/developers/LTI/test/v1p1/lms.css",
        "launch_presentation_document_target": "frame",
        "launch_presentation_locale": "en-US",
        "launch_presentation_return_url": "http://www.imsglobal.org/developers/LTI/test/v1p1/lms_return.php",
        "lis_outcome_service_url": "http://www.imsglobal.org/developers/LTI/test/v1p1/common/tool_consumer_outcome.php?b64=MTIzNDU6OjpzZWNyZXQ=",
        "lis_person_contact_email_primary": "user@school.edu",
        "lis_person_name_family": "Public",
        "lis_person_name_full": "Jane Q. Public",
        "lis_person_name_given": "Given",
        "lis_person_sourcedid": "school.edu:user",
        "lis_result_sourcedid": "feb-123-456-2929::28883",
        "lti_message_type": "basic-lti-launch-request",
        "lti_version": "LTI-1p0",
        "oauth_callback": "about:blank",
        "oauth_consumer_key": "12345",
        "oauth_nonce": "93ac608e18a7d41dec8f7219e1bf6a17",
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_timestamp": "1348093590",
        "oauth_version": "1.0",
        "resource_link_description": "A weekly blog.",
        "resource_link_id": "120988f929-274612",
        "resource_link_title": "Weekly Blog",
        "roles": "Instructor",
        "tool_consumer_info_product_family_code": "ims",
        "tool_consumer_info_version": "1.1",
        "tool_consumer_instance_description": "University of School (LMSng)",
        "tool_consumer_instance_guid": "lmsng.school.edu",
        "user_id": "292832126",
    }


@pytest.fixture(scope="session")
def rsa_private_key():
    """2048-bit RSA key shared by the RSA-SHA1 tests"""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def fixed_nonce_source():
    """Nonce source stub returning a constant nonce"""
    source = Mock()
    source.next.return_value = "93ac608e18a7d41dec8f7219e1bf6a17"
    return source


@pytest.fixture
def fixed_protocol(fixed_nonce_source):
    """Protocol with a constant nonce and timestamp"""
    return SigningProtocol(
        nonce_source=fixed_nonce_source,
        timestamp_generator=lambda: "1348093590"
    )


@pytest.fixture
def ims_tool_url():
    return IMS_TOOL_URL


@pytest.fixture
def ims_base_string():
    """Base string the IMS test consumer signs for ims_launch_form"""
    return IMS_BASE_STRING


@pytest.fixture
def ims_signature():
    """HMAC-SHA1 signature of ims_base_string with secret 'secret'"""
    return IMS_SIGNATURE
