import os, sys, json, pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add the service root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from utils.db_manager import Base, build_engine, get_db
from models.user import User
from models.workspace import Workspace
from models.dataset import Dataset
from models.tool import Tool
from models.conversation import TrainingConversation, Message, ToolCall
from api import api_router, register_exception_handlers

USER_IP = "10.0.0.1"
OTHER_IP = "10.0.0.2"

engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ------------------- App Test ---------------------
def create_test_app():
    app = FastAPI()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    register_exception_handlers(app)
    app.include_router(api_router)
    return app

# ------------------- Fixtures ---------------------

@pytest.fixture(scope="session")
def app():
    return create_test_app()

@pytest.fixture(scope="session")
def client(app):
    with TestClient(app) as c:
        yield c

@pytest.fixture(autouse=True)
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def test_user(db):
    user = User(username="tester", ip_address=USER_IP)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

@pytest.fixture
def other_user(db):
    user = User(username="someone_else", ip_address=OTHER_IP)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

@pytest.fixture
def user_headers(test_user):
    return {"X-Forwarded-For": USER_IP}

@pytest.fixture
def other_headers(other_user):
    return {"X-Forwarded-For": OTHER_IP}

@pytest.fixture
def test_workspace(db, test_user):
    workspace = Workspace(workspace_name="Support bot", user_id=test_user.id)
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    return workspace

@pytest.fixture
def test_dataset(db, test_workspace):
    dataset = Dataset(workspace_id=test_workspace.id, name="Refund flows")
    db.add(dataset)
    db.commit()
    db.refresh(dataset)
    return dataset

@pytest.fixture
def weather_tool(db, test_workspace):
    tool = Tool(
        workspace_id=test_workspace.id,
        tool_name="get_weather",
        description="Current weather for a city",
        parameters=json.dumps({
            "type": "object",
            "properties": {"location": {"type": "string"}},
            "required": ["location"]
        }),
        api_url="https://tools.example.com/weather"
    )
    db.add(tool)
    db.commit()
    db.refresh(tool)
    return tool

@pytest.fixture
def test_conversation(db, test_dataset):
    conversation = TrainingConversation(
        dataset_id=test_dataset.id,
        title="Weather lookup",
        tags=["weather"],
        messages=[
            Message(role="system", content="You are a helpful assistant.", order=0),
            Message(role="user", content="What's the weather in Paris?", order=1),
            Message(
                role="assistant",
                content=None,
                order=2,
                tool_calls=[
                    ToolCall(
                        tool_call_id="call_abc123",
                        type="function",
                        function_name="get_weather",
                        function_arguments='{"location": "Paris"}'
                    )
                ]
            ),
            Message(
                role="tool",
                content='{"temperature": 18}',
                order=3,
                name="get_weather",
                tool_call_id="call_abc123"
            ),
            Message(role="assistant", content="It is 18°C in Paris.", order=4),
        ]
    )
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation
