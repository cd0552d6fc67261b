"""Shared fixtures for the Uploadcare SDK tests."""

import json
import socket
from unittest.mock import patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from uploadcare_sdk import ApiCreds, RestClient, UploadClient


def make_response(status_code=200, json_body=None, body=None, headers=None):
    """Build a real ``requests.Response`` so decoding runs unmocked."""
    response = requests.Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"

    if json_body is not None:
        body = json.dumps(json_body)
        response.headers.setdefault("Content-Type", "application/json")
    if isinstance(body, str):
        body = body.encode("utf-8")

    response._content = body or b""
    return response


def sent_request(send, index=-1):
    """The PreparedRequest passed to a patched ``Session.send``."""
    return send.call_args_list[index][0][0]


def sent_json(send, index=-1):
    return json.loads(sent_request(send, index).body)


@pytest.fixture
def creds():
    return ApiCreds(secret_key="testsk", pub_key="testpk")


@pytest.fixture
def rest_client(creds):
    client = RestClient(creds)
    yield client
    client.close()


@pytest.fixture
def upload_client(creds):
    client = UploadClient(creds)
    yield client
    client.close()


@pytest.fixture
def rest_send(rest_client):
    """Patched transport of ``rest_client``; set ``return_value`` or ``side_effect``."""
    with patch.object(rest_client.session, "send") as send:
        send.return_value = make_response(json_body={})
        yield send


@pytest.fixture
def upload_send(upload_client):
    with patch.object(upload_client.session, "send") as send:
        send.return_value = make_response(json_body={})
        yield send


@pytest.fixture
def file_payload():
    return {
        "uuid": "22240276-2f06-41f8-9411-755c8ce926ed",
        "datetime_removed": None,
        "datetime_stored": "2018-11-26T12:49:10.477888Z",
        "datetime_uploaded": "2018-11-26T12:49:09.945335Z",
        "image_info": {
            "color_mode": "RGB",
            "orientation": None,
            "format": "JPEG",
            "sequence": False,
            "height": 500,
            "width": 800,
            "geo_location": {"latitude": 55.62013611111111, "longitude": 37.66299166666666},
            "datetime_original": "2018-08-20T08:59:50",
            "dpi": [72, 72],
        },
        "is_image": True,
        "is_ready": True,
        "mime_type": "image/jpeg",
        "original_file_url": "https://ucarecdn.com/22240276-2f06-41f8-9411-755c8ce926ed/pineapple.jpg",
        "original_filename": "pineapple.jpg",
        "size": 642,
        "url": "https://api.uploadcare.com/files/22240276-2f06-41f8-9411-755c8ce926ed/",
        "variations": None,
        "video_info": None,
        "source": None,
        "rekognition_info": {"Food": 0.98, "Fruit": 0.97},
    }


@pytest.fixture
def silent_server():
    """Base URL of a local socket that accepts connections and never answers."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    host, port = server.getsockname()
    yield f"http://{host}:{port}"
    server.close()
