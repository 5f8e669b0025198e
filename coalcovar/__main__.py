from coalcovar import _cli


def main():
    _cli.coalcovar_main()


if __name__ == "__main__":
    main()
