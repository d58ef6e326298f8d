from quality_dashboard.cli import cli

if __name__ == "__main__":
    cli()
