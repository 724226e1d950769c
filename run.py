# run.py
import logging

from flask.cli import with_appcontext

from clinica import create_app, db
from clinica.seeds import seed_defaults

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    handlers=[logging.StreamHandler()]
)

app = create_app()


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    seed_defaults(app.config)
    print('Database initialized.')


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=app.config['PORT'])
