from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

ATDF = """\
<avr-tools-device-file schema-version="0.3">
  <devices>
    <device name="ATtest8" architecture="AVR8" family="megaAVR">
      <address-spaces>
        <address-space endianness="little" name="data" id="data" start="0x0000" size="0x0900">
          <memory-segment start="0x0020" size="0x0040" type="io" name="IOMEM"/>
          <memory-segment start="0x0100" size="0x0800" type="ram" name="IRAM" rw="RW" exec="0"/>
        </address-space>
        <address-space endianness="little" name="prog" id="prog" start="0x0000" size="0x8000">
          <memory-segment start="0x0000" size="0x8000" type="flash" rw="RW" exec="1" name="FLASH"/>
        </address-space>
        <address-space endianness="little" name="fuses" id="fuses" start="0" size="3">
          <memory-segment start="0" size="3" type="fuses" rw="RW" name="FUSES"/>
        </address-space>
        <address-space endianness="big" name="osccal" id="osccal" start="0" size="1">
          <memory-segment start="0" size="1" type="osccal" rw="R" name="OSCCAL"/>
        </address-space>
      </address-spaces>
      <peripherals>
        <module name="PORT">
          <instance name="PORTB" caption="I/O Port B">
            <register-group name="PORTB" name-in-module="PORTB" offset="0x23" address-space="data" caption="I/O Port"/>
            <signals>
              <signal group="P" function="default" pad="PB0" index="0"/>
              <signal group="P" function="default" pad="PB1" index="01"/>
            </signals>
          </instance>
          <instance name="PORTC">
            <register-group name="PORTC" offset="0x26" address-space="data"/>
          </instance>
        </module>
        <module name="USART">
          <instance name="USART0" caption="USART 0">
            <register-group name="USART0" name-in-module="USART0" offset="0xC0" address-space="data"/>
          </instance>
        </module>
        <module name="FUSE">
          <instance name="FUSE">
            <register-group name="FUSE" name-in-module="FUSE" offset="0" address-space="fuses"/>
          </instance>
        </module>
        <module name="WDT">
          <instance name="WDT">
            <signals>
              <signal group="WDT" function="default" pad="PB6"/>
            </signals>
          </instance>
        </module>
      </peripherals>
      <interrupts>
        <interrupt index="0" name="RESET" caption="External Pin, Power-on Reset"/>
        <interrupt index="18" name="USART_RX" caption="USART Rx Complete" module-instance="USART0"/>
        <interrupt index="019" name="USART_UDRE" module-instance="USART0"/>
      </interrupts>
    </device>
  </devices>
  <modules>
    <module name="PORT" caption="I/O Port">
      <register-group name="PORTB" caption="I/O Port">
        <register name="PORTB" caption="Port B Data Register" offset="0x02" size="1" mask="0xFF" ocd-rw="RW"/>
        <register name="DDRB" caption="Port B Data Direction Register" offset="0x01" size="1" mask="0xFF"/>
        <register name="PINB" caption="Port B Input Pins" offset="0x00" size="1" mask="0xFF" ocd-rw="R" initval="0x00"/>
      </register-group>
      <register-group name="PORTC" caption="I/O Port">
        <register name="PORTC" offset="0x02" size="1" mask="0x7F"/>
      </register-group>
    </module>
    <module name="USART" caption="USART">
      <register-group name="USART0" caption="USART">
        <register name="UDR0" caption="USART I/O Data Register" offset="0x06" size="1" mask="0xFF" ocd-rw=""/>
        <register name="UCSR0A" offset="0x00" size="1" initval="0x20" ocd-rw="RW">
          <bitfield name="RXC0" caption="USART Receive Complete" mask="0x80"/>
          <bitfield name="ODD" caption="Split field" mask="0x0B"/>
        </register>
        <register name="UCSR0C" offset="0x02" size="1" initval="0x06">
          <bitfield name="UMSEL0" caption="USART Mode Select" mask="0xC0" values="COMM_USART_MODE_2BIT"/>
        </register>
        <register name="UBRR0" offset="0x04" size="2" mask="0x0FFF"/>
      </register-group>
      <value-group name="COMM_USART_MODE_2BIT">
        <value name="ASYNCHRONOUS_USART" caption="Asynchronous USART" value="0x00"/>
        <value name="SYNCHRONOUS_USART" caption="Synchronous USART" value="0x01"/>
        <value name="MASTER_SPI" caption="Master SPI" value="0x03"/>
      </value-group>
    </module>
    <module name="FUSE" caption="Fuses">
      <register-group name="FUSE">
        <register name="LOW" offset="0x00" size="1" initval="0x62"/>
      </register-group>
    </module>
    <module name="WDT" caption="Watchdog Timer">
      <register-group name="WDT">
        <register name="WDTCSR" offset="0x00" size="1"/>
      </register-group>
    </module>
  </modules>
</avr-tools-device-file>
"""

MINIMAL = """\
<avr-tools-device-file>
  <devices>
    <device name="ATmin">
      <address-spaces>
        <address-space endianness="little" name="data" start="0" size="0x8000"/>
      </address-spaces>
      <peripherals>{peripherals}</peripherals>
    </device>
  </devices>
  <modules>{modules}</modules>
</avr-tools-device-file>
"""


@pytest.fixture
def atdf_root() -> ET.Element:
    return ET.fromstring(ATDF)


@pytest.fixture
def atdf_file(tmp_path):
    path = tmp_path / "ATtest8.atdf"
    path.write_text(ATDF, encoding="utf-8")
    return path


@pytest.fixture
def make_atdf():
    """Build a one-device document from <peripherals> and <modules> contents."""

    def build(peripherals: str = "", modules: str = "") -> ET.Element:
        return ET.fromstring(MINIMAL.format(peripherals=peripherals, modules=modules))

    return build
