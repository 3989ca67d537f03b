import pytest
from flask import Flask
from jares import JARES
from tests.models import db, User, Post, Comment, Tag, Car, Truck, Motorcycle, Membership


@pytest.fixture
def app():
    app = Flask("jares_test")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://")
    db.init_app(app)
    JARES(app)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def blog(app):
    """
    john wrote post1 (tags: python, sqla) and post2 (tag: python)
    jane commented on both posts and owns a car, a truck and a motorcycle
    """
    john = User(id=1, name="John", email="john@example.com")
    jane = User(id=2, name="Jane", email="jane@example.com")
    python = Tag(id=1, name="python")
    sqla = Tag(id=2, name="sqla")
    post1 = Post(id=1, title="First", content="first post", user=john, tags=[python, sqla])
    post2 = Post(id=2, title="Second", content="second post", user=john, tags=[python])
    comment1 = Comment(id=1, body="nice", post=post1, user=jane)
    comment2 = Comment(id=2, body="great", post=post2, user=jane)
    car = Car(id=1, name="Civic", brand="Honda", year=2020, engine_size=1500, owner=jane)
    truck = Truck(id=2, name="F-150", brand="Ford", year=2021, cargo_capacity=1000, owner=jane)
    motorcycle = Motorcycle(id=3, name="Monster", brand="Ducati", year=2019, owner=jane)
    membership = Membership(user=john, tag=python, role="owner")
    db.session.add_all([john, jane, python, sqla, post1, post2, comment1, comment2, car, truck, motorcycle, membership])
    db.session.commit()
    return dict(john=john, jane=jane, python=python, sqla=sqla, post1=post1, post2=post2, comment1=comment1, comment2=comment2, car=car, truck=truck, motorcycle=motorcycle, membership=membership)
