import click

@click.group()
def db():
    """Database management commands"""
    pass

@db.command()
@click.pass_context
def init(ctx):
    """Create all tables that do not exist yet"""
    ctx.obj['db'].init_db()
    click.echo(click.style("Database initialized", fg='green'))
