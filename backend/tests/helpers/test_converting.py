from unittest.mock import patch

from relay_server.helpers.converting import to_data_url


@patch("relay_server.helpers.converting.base64.b64encode")
def test_to_data_url(mock_b64encode):
    # Arrange
    mock_file = b"test image content"
    mock_mime_type = "image/jpeg"
    mock_encoded = b"dGVzdCBpbWFnZSBjb250ZW50"
    mock_b64encode.return_value = mock_encoded

    # Act
    result = to_data_url(mock_file, mock_mime_type)

    # Assert
    mock_b64encode.assert_called_once_with(mock_file)
    assert result == f"data:{mock_mime_type};base64,{mock_encoded.decode('utf-8')}"


def test_to_data_url_integration():
    result = to_data_url(b"test", "image/png")

    assert result == "data:image/png;base64,dGVzdA=="
