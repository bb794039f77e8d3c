import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.gradebook_service import GradebookService

PREFIX = "/api/v1/gradebook"


@pytest.fixture
def client():
    """每个测试使用独立的成绩册"""
    return TestClient(create_app(GradebookService()))


@pytest.fixture
def loaded_client(client):
    """录入三名学生成绩与科目权重"""
    client.put(f"{PREFIX}/weights", json={"weights": {"Math": 0.5, "English": 0.3, "Science": 0.2}})
    grades = []
    for student_name, scores in [("Alice", (90, 80, 70)), ("Bob", (60, 70, 80)), ("Charlie", (50, 40, 30))]:
        for subject, score in zip(("Math", "English", "Science"), scores):
            grades.append({"student_name": student_name, "subject": subject, "score": score})
    response = client.post(f"{PREFIX}/grades/batch", json={"grades": grades})
    assert response.status_code == 200
    return client


class TestServiceEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_default_service(self):
        """未传入服务时创建空成绩册"""
        app = create_app()
        assert isinstance(app.state.gradebook, GradebookService)
        assert TestClient(app).get(f"{PREFIX}/weights").json() == {"weights": {}}

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy"}


class TestGradeEndpoints:
    """成绩与权重写入接口测试"""

    def test_add_and_get_grade(self, client):
        response = client.post(f"{PREFIX}/grades", json={"student_name": "Alice", "subject": "Math", "score": 90})
        assert response.status_code == 200
        assert response.json()["written"] == 1

        response = client.get(f"{PREFIX}/grades/Alice/Math")
        assert response.json() == {"student_name": "Alice", "subject": "Math", "score": 90}

    def test_missing_grade_is_null(self, client):
        response = client.get(f"{PREFIX}/grades/Alice/Math")
        assert response.status_code == 200
        assert response.json()["score"] is None

    def test_negative_score_rejected(self, client):
        response = client.post(f"{PREFIX}/grades", json={"student_name": "Alice", "subject": "Math", "score": -1})
        assert response.status_code == 400

    def test_empty_name_rejected(self, client):
        response = client.post(f"{PREFIX}/grades", json={"student_name": "", "subject": "Math", "score": 80})
        assert response.status_code == 400

    def test_fractional_score_rejected(self, client):
        response = client.post(f"{PREFIX}/grades", json={"student_name": "Alice", "subject": "Math", "score": 85.5})
        assert response.status_code == 422

    def test_batch_is_all_or_nothing(self, client):
        response = client.post(f"{PREFIX}/grades/batch", json={"grades": [
            {"student_name": "Alice", "subject": "Math", "score": 90},
            {"student_name": "Bob", "subject": "Math", "score": -5},
        ]})

        assert response.status_code == 400
        assert client.get(f"{PREFIX}/grades/Alice/Math").json()["score"] is None

    def test_weights_merge(self, client):
        client.put(f"{PREFIX}/weights", json={"weights": {"Math": 0.5}})
        response = client.put(f"{PREFIX}/weights", json={"weights": {"English": 0.3}})

        assert response.json()["weights"] == {"Math": 0.5, "English": 0.3}
        assert client.get(f"{PREFIX}/weights").json()["weights"] == {"Math": 0.5, "English": 0.3}

    def test_negative_weight_rejected(self, client):
        response = client.put(f"{PREFIX}/weights", json={"weights": {"Math": -0.5}})
        assert response.status_code == 400


class TestSubjectEndpoints:
    """单科统计接口测试"""

    def test_statistics(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/subjects/Math/statistics")
        data = response.json()

        assert response.status_code == 200
        assert data["subject"] == "Math"
        assert data["mean"] == 66.7
        assert data["median"] == 60.0
        assert data["variance"] == 288.9
        assert data["std"] == 17.0
        assert data["iqr"] == 40.0
        assert data["max"] == 90
        assert data["min"] == 50

    def test_distribution(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/subjects/Math/distribution", params={"interval": 20})
        data = response.json()

        assert data["total_count"] == 3
        assert data["interval"] == 20
        assert [item["range"] for item in data["distribution"]] == ["40-59", "60-79", "80-99"]
        assert [item["count"] for item in data["distribution"]] == [1, 1, 1]

    def test_distribution_invalid_interval(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/subjects/Math/distribution", params={"interval": 0})
        assert response.status_code == 400

    def test_percentile_rank(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/subjects/Math/percentile-rank", params={"score": 60})
        assert response.json()["percentile_rank"] == pytest.approx(100 / 3)

    def test_ranking(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/subjects/Science/ranking")
        assert response.json() == [
            {"student_name": "Bob", "score": 80},
            {"student_name": "Alice", "score": 70},
            {"student_name": "Charlie", "score": 30},
        ]


class TestWeightedEndpoints:
    """加权总分接口测试"""

    def test_statistics(self, loaded_client):
        data = loaded_client.get(f"{PREFIX}/weighted/statistics").json()

        assert data["count"] == 3
        assert data["mean"] == pytest.approx(193 / 3)
        assert data["variance"] == pytest.approx(270.2222, abs=1e-4)
        assert data["distribution"]["80-89"] == 1

    def test_scores(self, loaded_client):
        data = loaded_client.get(f"{PREFIX}/weighted/scores").json()

        assert [item["student_name"] for item in data] == ["Alice", "Bob", "Charlie"]
        assert [item["rank"] for item in data] == [1, 2, 3]
        assert data[0]["weighted_score"] == pytest.approx(83.0)

    def test_distribution(self, loaded_client):
        data = loaded_client.get(f"{PREFIX}/weighted/distribution").json()

        assert data["total_count"] == 3
        assert data["interval"] is None
        assert [item["range"] for item in data["distribution"]] == ["0-59", "60-69", "70-79", "80-89", "90-100"]

    def test_percentile_ranks(self, loaded_client):
        data = loaded_client.get(f"{PREFIX}/weighted/percentile-ranks").json()
        assert data["percentile_ranks"]["Bob"] == pytest.approx(100 / 3)

    def test_range(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/weighted/range", params={"min_score": 43, "max_score": 67})
        assert response.json()["students"] == ["Bob", "Charlie"]

    def test_student_weighted_average(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/students/Alice/weighted-average")
        assert response.json()["weighted_average"] == pytest.approx(83.0)

    def test_unknown_student(self, loaded_client):
        response = loaded_client.get(f"{PREFIX}/students/Nobody/weighted-average")

        assert response.status_code == 404
        assert response.json()["detail"] == "未找到学生: Nobody"

    def test_empty_gradebook(self, client):
        data = client.get(f"{PREFIX}/weighted/statistics").json()

        assert data["count"] == 0
        assert data["mean"] == 0.0
        assert data["mode"] == []
