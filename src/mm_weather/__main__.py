from mm_weather.main import main

main()
