import pytest


@pytest.fixture
def module_id(client):
    course_id = client.post('/api/courses', json={'name': 'Software Engineering', 'type': 'BSc'}).json()['id']
    return client.post(
        '/api/modules', json={'name': 'Databases', 'code': 'DB201', 'credits': 15, 'course_id': course_id}
    ).json()['id']


def test_create_and_list_class_schedule(client, module_id):
    payload = {
        'day_of_week': 'Monday',
        'start_time': '09:00',
        'end_time': '10:30',
        'location': 'Room 101',
        'module_id': module_id,
    }
    r = client.post('/api/class_schedules', json=payload)
    assert r.status_code == 200
    schedule_id = r.json()['id']
    rows = client.get('/api/class_schedules').json()
    assert rows == [{**payload, 'id': schedule_id, 'module_name': 'Databases', 'module_code': 'DB201'}]


def test_schedule_times_are_not_cross_checked(client, module_id):
    r = client.post('/api/class_schedules', json={
        'day_of_week': 'Someday', 'start_time': '17:00', 'end_time': '08:00', 'module_id': module_id,
    })
    assert r.status_code == 200


def test_schedule_partial_update(client, module_id):
    schedule_id = client.post('/api/class_schedules', json={
        'day_of_week': 'Monday', 'start_time': '09:00', 'end_time': '10:30', 'module_id': module_id,
    }).json()['id']
    assert client.put(f'/api/class_schedules/{schedule_id}', json={'location': 'Lab 2'}).json() == {'changes': 1}
    row = client.get('/api/class_schedules').json()[0]
    assert row['day_of_week'] == 'Monday'
    assert row['start_time'] == '09:00'
    assert row['location'] == 'Lab 2'


def test_create_and_update_assessment(client, module_id):
    payload = {'title': 'Exam 1', 'type': 'Exam', 'due_date': '2025-09-30', 'module_id': module_id}
    assessment_id = client.post('/api/assessments', json=payload).json()['id']
    rows = client.get('/api/assessments').json()
    assert rows == [{**payload, 'id': assessment_id, 'module_name': 'Databases', 'module_code': 'DB201'}]

    r = client.put(f'/api/assessments/{assessment_id}', json={'due_date': '2025-10-01'})
    assert r.json() == {'changes': 1}
    row = client.get('/api/assessments').json()[0]
    assert row == {**rows[0], 'due_date': '2025-10-01'}


def test_assessment_missing_title_is_rejected(client, module_id):
    r = client.post('/api/assessments', json={'type': 'Exam', 'due_date': '2025-09-30', 'module_id': module_id})
    assert r.status_code == 500
    assert r.json() == {'error': 'NOT NULL constraint failed: assessments.title'}


def test_deleting_module_cascades_to_schedules_and_assessments(client, module_id):
    other = client.post('/api/modules', json={'name': 'Networks', 'code': 'NET202'}).json()['id']
    for mid in (module_id, module_id, other):
        client.post('/api/class_schedules', json={
            'day_of_week': 'Tuesday', 'start_time': '10:00', 'end_time': '11:00', 'module_id': mid,
        })
        client.post('/api/assessments', json={
            'title': 'Coursework', 'type': 'CW', 'due_date': '2025-12-01', 'module_id': mid,
        })

    assert client.delete(f'/api/modules/{module_id}').json() == {'changes': 1}
    assert [s['module_id'] for s in client.get('/api/class_schedules').json()] == [other]
    assert [a['module_id'] for a in client.get('/api/assessments').json()] == [other]


def test_delete_schedule_and_assessment(client, module_id):
    schedule_id = client.post('/api/class_schedules', json={
        'day_of_week': 'Friday', 'start_time': '14:00', 'end_time': '15:00', 'module_id': module_id,
    }).json()['id']
    assessment_id = client.post('/api/assessments', json={
        'title': 'Quiz', 'type': 'Quiz', 'due_date': '2025-11-11', 'module_id': module_id,
    }).json()['id']
    assert client.delete(f'/api/class_schedules/{schedule_id}').json() == {'changes': 1}
    assert client.delete(f'/api/assessments/{assessment_id}').json() == {'changes': 1}
    assert client.delete(f'/api/assessments/{assessment_id}').json() == {'changes': 0}
    assert client.get('/api/class_schedules').json() == []
    assert client.get('/api/assessments').json() == []
    assert len(client.get('/api/modules').json()) == 1
