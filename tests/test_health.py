def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    json_data = response.get_json()
    assert json_data.get('status') == 'ok'


def test_api_docs_list_workflow_endpoints(client):
    resp = client.get('/apispec.json')
    assert resp.status_code == 200
    paths = resp.get_json()['paths']
    assert '/api/v1/vendors/apply' in paths
    assert '/api/v1/vendors/applications/{application_id}/review' in paths
    assert not any(p.startswith('/__') for p in paths)


def test_metrics_endpoint(client):
    client.get('/health')
    resp = client.get('/metrics')
    assert resp.status_code == 200
    assert b'flask_http_request' in resp.data
