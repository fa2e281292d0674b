"""
gitdeploy - Deploy a built static site to a remote git repository

Clones the target repository into a temporary workspace, builds the site into
it, commits everything and pushes the branch.
"""
import argparse
import sys

__version__ = "1.0.0"


def main():
    """Main CLI entry point"""
    from gitdeploy.commands import deploy

    parser = argparse.ArgumentParser(
        prog='gitdeploy',
        description='gitdeploy: Deploy a built site to a remote git repository',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  gitdeploy deploy -r git@github.com:me/site.git -b gh-pages
  gitdeploy deploy -r ../site.git -b main -f docs -m "Publish docs"
  gitdeploy deploy -c deploy.yaml --build-command "npm run build"
  gitdeploy deploy -r repo.git -b gh-pages -n "Deploy Bot" -a bot@example.com
        '''
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Deploy command
    deploy_parser = subparsers.add_parser('deploy', help='Deploy the site to a remote git repository')
    deploy.setup_parser(deploy_parser)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Dispatch to command handler
    try:
        if args.command == 'deploy':
            sys.exit(deploy.execute(args))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
