from mathplot.shell import main


################
## Entrypoint ##
################

if __name__ == '__main__':
    main()
