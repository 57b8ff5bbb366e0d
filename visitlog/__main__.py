from visitlog.main import run

run()
