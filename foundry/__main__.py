from foundry.deployments import main

if __name__ == "__main__":
    main()
