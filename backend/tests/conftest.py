import os, sys, pytest
# Ensure backend directory is on path so 'campusfix' and 'tests' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from campusfix import create_app, get_db
from campusfix.models.user import Base
# Import all model modules to ensure tables are registered before create_all
import campusfix.models.complaint  # noqa: F401
import campusfix.models.feedback  # noqa: F401


@pytest.fixture(scope='session')
def app_instance(tmp_path_factory):
    app = create_app({
        'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
        'JWT_SECRET_KEY': 'test-secret-key-that-is-long-enough-for-hs256',
        'UPLOAD_FOLDER': str(tmp_path_factory.mktemp('uploads')),
    })
    yield app


@pytest.fixture(autouse=True)
def app_context(app_instance):
    """Fresh schema for every test, run inside an application context."""
    with app_instance.app_context():
        session = get_db()
        session.close()
        engine = session.get_bind()
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        yield app_instance
        get_db().rollback()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()
