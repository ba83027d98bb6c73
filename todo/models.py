from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class Task(db.Model):
    __tablename__ = 'todo'
    # AUTOINCREMENT keeps deleted ids from being handed out again
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    date_added = db.Column(db.DateTime, nullable=False, server_default=db.func.current_timestamp())
    is_done = db.Column(db.Boolean, nullable=False, server_default='0')

    def __repr__(self):
        return f'<Task {self.id} {self.name!r} done={self.is_done}>'
