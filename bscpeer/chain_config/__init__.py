"""BSC chain configuration: boot nodes, hardforks, chain specs and fork ids."""