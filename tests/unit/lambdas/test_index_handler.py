from linkfast.lambdas.index import app


def test_lambda_handler():
    response = app.lambda_handler({}, None)

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'].startswith('text/html')
    assert '<title>LinkFast</title>' in response['body']
    assert "fetch('/api/shorten'" in response['body']
